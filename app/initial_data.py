import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.auth import hash_password
from app.core.config import ADMIN_EMAIL, ADMIN_PASSWORD
from app.models.aid_model import AidType
from app.models.sanction_model import SanctionType
from app.models.system_settings_model import Configuration
from app.models.user_model import StaffUser
from app.utils.database import SessionLocal

logger = logging.getLogger(__name__)

# (name, category, default_amount, description)
SANCTION_TYPES = [
    ("Retard à la réunion", "MEETING", 1000, "Arrivée après l'ouverture de la séance"),
    ("Absence non justifiée", "MEETING", 2000, "Absence à la réunion mensuelle sans excuse"),
    ("Retard à l'entraînement", "SPORT_E2D", 500, None),
    ("Carton rouge", "SPORT_E2D", 5000, "Expulsion lors d'un match"),
    ("Carton rouge", "SPORT_PHOENIX", 5000, "Expulsion lors d'un match"),
    ("Absence au match", "SPORT_PHOENIX", 1000, None),
    ("Comportement inapproprié", "DISCIPLINARY", 5000, None),
]

# (name, default_amount, repayment_delay_months, description)
AID_TYPES = [
    ("Décès d'un parent", 100000, 12, None),
    ("Mariage", 50000, 6, None),
    ("Naissance", 30000, 6, None),
    ("Maladie", 50000, 6, "Hospitalisation du membre ou d'un proche"),
]

# (key, value, value_type, category, description)
CONFIGURATIONS = [
    ("association_name", "E2D", "text", "general", "Nom de l'association"),
    ("monthly_sport_fund_amount", "2000", "number", "sport", "Fond sport mensuel par membre"),
    ("phoenix_membership_fee", "10000", "number", "sport", "Adhésion annuelle au club Phoenix"),
    ("phoenix_sovereign_fund_amount", "5000", "number", "sport", "Fond souverain des membres du comité"),
    ("phoenix_payment_delay_days", "30", "number", "sport", "Délai de paiement de l'adhésion (jours)"),
    ("sanction_suspension_threshold", "3", "number", "sanctions", "Sanctions impayées avant suspension"),
]


def _seed_sanction_types(db: Session) -> int:
    added = 0
    for name, category, amount, description in SANCTION_TYPES:
        exists = (
            db.query(SanctionType)
            .filter(SanctionType.name == name, SanctionType.category == category)
            .first()
        )
        if not exists:
            db.add(SanctionType(name=name, category=category, default_amount=amount,
                                description=description, is_active=True))
            added += 1
    return added


def _seed_aid_types(db: Session) -> int:
    added = 0
    for name, amount, delay, description in AID_TYPES:
        if not db.query(AidType).filter(AidType.name == name).first():
            db.add(AidType(name=name, default_amount=amount, repayment_delay_months=delay,
                           description=description, is_active=True))
            added += 1
    return added


def _seed_configurations(db: Session) -> int:
    added = 0
    for key, value, value_type, category, description in CONFIGURATIONS:
        if not db.query(Configuration).filter(Configuration.key == key).first():
            db.add(Configuration(key=key, value=value, value_type=value_type, category=category,
                                 description=description, editable=True))
            added += 1
    return added


def _seed_admin(db: Session) -> int:
    if not ADMIN_EMAIL or not ADMIN_PASSWORD:
        return 0
    email = ADMIN_EMAIL.strip().lower()
    if db.query(StaffUser).filter(StaffUser.email == email).first():
        return 0
    db.add(StaffUser(email=email, full_name="Administrator", password_hash=hash_password(ADMIN_PASSWORD),
                     is_active=True))
    return 1


def init_seed(db: Optional[Session] = None) -> None:
    """Idempotent: only inserts reference rows that are missing."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        counts = {
            "sanction_types": _seed_sanction_types(db),
            "aid_types": _seed_aid_types(db),
            "configurations": _seed_configurations(db),
            "staff_users": _seed_admin(db),
        }
        db.commit()
        logger.info("seed done: %s", ", ".join(f"{k}={v}" for k, v in counts.items()))
    except Exception:
        db.rollback()
        logger.exception("seed failed")
        raise
    finally:
        if own_session:
            db.close()
