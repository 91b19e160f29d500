import os
import logging
from dotenv import load_dotenv

load_dotenv()

# OpenAI (embeddings + title generation)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
TITLE_MODEL = os.getenv("TITLE_MODEL", "gpt-3.5-turbo")
GENERATE_TITLES = os.getenv("GENERATE_TITLES", "true").strip().lower() in ("1", "true", "yes")

# Pinecone
PINECONE_API_KEY = os.getenv("PINECONE_API_KEY")
PINECONE_ENVIRONMENT = os.getenv("PINECONE_ENVIRONMENT")
PINECONE_INDEX_NAME = os.getenv("PINECONE_INDEX_NAME", "")
# Data-plane host of the index; resolved through the control plane when unset
PINECONE_INDEX_HOST = os.getenv("PINECONE_INDEX_HOST")
PINECONE_CONTROLLER_URL = os.getenv("PINECONE_CONTROLLER_URL", "https://api.pinecone.io")

UPSERT_BATCH_SIZE = 100
DEFAULT_TOP_K = 5
DEMO_TOP_K = 3
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
