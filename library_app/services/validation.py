from library_app.errors import InvalidRequest


def require_text(data: dict, key: str, label: str | None = None) -> str:
    value = data.get(key)
    value = str(value).strip() if value is not None else ""
    if not value:
        raise InvalidRequest(f"{label or key} zorunlu")
    return value


def require_count(data: dict, key: str, default=None) -> int:
    raw = data.get(key, default)
    value = None
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        digits = text[1:] if text.startswith("-") else text
        if digits.isascii() and digits.isdigit():
            value = int(text)
    if value is None:
        raise InvalidRequest(f"{key} tam sayı olmalı")
    if value < 0:
        raise InvalidRequest(f"{key} negatif olamaz")
    return value
