# run_server.py
import os, sys, traceback, faulthandler
from pathlib import Path

# write crash logs next to the exe
BASE_DIR = Path(sys.executable).resolve().parent if getattr(sys, "frozen", False) else Path(__file__).resolve().parent
CRASH_LOG = BASE_DIR / "backend_crash.log"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5001"))

# dump fatal crashes too
faulthandler.enable(open(CRASH_LOG, "a", encoding="utf-8"))


def log(msg: str):
    with open(CRASH_LOG, "a", encoding="utf-8") as f:
        f.write(msg + "\n")


if __name__ == "__main__":
    try:
        log("\n--- START ---")
        log(f"exe={sys.executable}")
        log(f"cwd={os.getcwd()}")
        log(f"base_dir={BASE_DIR}")

        import uvicorn

        # import app after the crash log is ready
        from main import app

        uvicorn.run(app, host=HOST, port=PORT, reload=False, log_level="info")

    except Exception:
        err = traceback.format_exc()
        log(err)
        print(err)  # if console is visible
        if getattr(sys, "frozen", False):
            input("\nPress Enter to exit...")
