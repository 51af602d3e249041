"""
TurtleWatch Backend - Password Hashing
=======================================

What:  Salted one-way password hashing with bcrypt.
How:   bcrypt.gensalt() embeds a random salt and the cost factor in every hash,
       so only the hash string is stored. Async wrappers run the CPU-bound
       work in Starlette's threadpool to keep the event loop free.
Who:   UserService (register, login).

Length limit:
    bcrypt only reads the first 72 bytes of its input. Older releases
    truncate silently, newer ones raise. Both hashing and verification here
    refuse longer passwords explicitly, so every bcrypt release behaves the
    same: registration rejects them up front and they never verify.
"""

import bcrypt
from starlette.concurrency import run_in_threadpool

MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a plaintext password; returns the UTF-8 bcrypt hash string.

    Raises:
        ValueError: password longer than MAX_PASSWORD_BYTES once encoded
    """
    if password_too_long(password):
        raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash.

    Values that are not bcrypt hashes (e.g. legacy plaintext rows) and
    over-long passwords never match.
    """
    if not password_hash or password_too_long(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # bcrypt rejects malformed hashes ("Invalid salt")
        return False


async def hash_password_async(password: str, rounds: int = 12) -> str:
    return await run_in_threadpool(hash_password, password, rounds)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await run_in_threadpool(verify_password, password, password_hash)
