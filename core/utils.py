# core/utils.py

def sanitize(data: dict) -> dict:
    """
    Sanitize dictionary data:
    - Empty strings → None
    - Strip string whitespace
    - Everything else kept as-is

    Numeric-looking strings stay strings: organization ids are compared
    with strict equality by the authorization engine.
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped or None
            continue

        clean[k] = v

    return clean
