import json


def clean_query(raw_text) -> str:
    if not raw_text:
        return ""
    return " ".join(raw_text.split())


def normalize_metadata(meta: dict) -> dict:
    """Flatten metadata into values Pinecone accepts (str, number, bool, list of str)."""
    normalized = {}
    for k, v in meta.items():
        if v is None:
            continue
        if isinstance(v, (list, tuple, set)):
            normalized[k] = [str(item) for item in v]
        elif isinstance(v, dict):
            normalized[k] = json.dumps(v)
        else:
            normalized[k] = v
    return normalized
