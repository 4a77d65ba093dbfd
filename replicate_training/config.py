import os
from dotenv import load_dotenv

load_dotenv()

# Base URL of the hosted training API (no trailing slash)
REPLICATE_API_BASE_URL = os.getenv("REPLICATE_API_BASE_URL", "https://api.replicate.com/v1").rstrip("/")
REPLICATE_API_TOKEN = os.getenv("REPLICATE_API_TOKEN")

# Trainer model that runs Flux LoRA fine-tuning, as "owner/name"
FLUX_TRAINER_MODEL = os.getenv("FLUX_TRAINER_MODEL", "ostris/flux-dev-lora-trainer")
# Trainer versions change often; no default is pinned here
FLUX_TRAINER_VERSION = os.getenv("FLUX_TRAINER_VERSION")

REPLICATE_REQUEST_TIMEOUT = float(os.getenv("REPLICATE_REQUEST_TIMEOUT", "120.0"))
