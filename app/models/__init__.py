# Automatically load all models so metadata knows them
from app.models.member_model import Member, MemberStatusHistory
from app.models.cotisation_model import Cotisation
from app.models.loan_model import Loan
from app.models.sanction_model import Sanction, SanctionType
from app.models.aid_model import AidType, SocialAid, SovereignFundDebt, DebtPayment
from app.models.savings_model import SavingsDeposit
from app.models.system_settings_model import Configuration
from app.models.user_model import StaffUser
from app.models.sport_model import (
    PhoenixAdherent,
    TrainingSession,
    Match,
    MatchCard,
    SportExpense,
    SportDonation,
)
from app.models.meeting_model import MeetingReport, AgendaItem, Resolution, HostingSchedule
