import secrets


def generate_id(length: int) -> str:
    """Random lowercase hex id, two characters per byte."""
    if length <= 0 or length % 2 != 0:
        raise ValueError(f"id length must be a positive even number, got {length}")
    return secrets.token_bytes(length // 2).hex()
