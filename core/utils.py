# core/utils.py

def sanitize(data: dict) -> dict:
    """
    Sanitize a dumped request model before it is stored:
    - Strip string whitespace
    - Empty strings → None
    - Everything else kept as-is (typed fields were already coerced by
      the model; open-schema extras such as phone numbers stay strings)
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped if stripped else None
            continue

        clean[k] = v

    return clean
