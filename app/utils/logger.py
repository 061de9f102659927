import sys
import logging

from app.config import config

logging_str = "[%(asctime)s] {%(pathname)s:%(lineno)d} %(levelname)s - %(message)s"
config.LOG_DIR.mkdir(parents=True, exist_ok=True)
logging_path = config.LOG_DIR / "studynotes.log"

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format=logging_str,
    handlers=[
        logging.FileHandler(logging_path, encoding="utf-8"),
        logging.StreamHandler(sys.stdout)
    ]
)

# Per-request lines from the HTTP clients drown out the fetch attempt log
for noisy in ("urllib3", "httpx", "httpcore", "groq._base_client"):
    logging.getLogger(noisy).setLevel(logging.WARNING)

logging = logging.getLogger('studynotes')
