import hashlib


def md5_bytes(b: bytes) -> str:
    return hashlib.md5(b).hexdigest()


def md5_text(s: str) -> str:
    return md5_bytes(s.encode("utf-8"))
