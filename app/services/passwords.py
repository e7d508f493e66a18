# app/services/passwords.py
"""
Password hashing on top of pwdlib. Hashes are stored in the argon2 PHC
string format (``$argon2id$v=19$...``).
"""
from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pwdlib.hashers.argon2 import Argon2Hasher

_password_hash = PasswordHash((Argon2Hasher(),))


def hash_password(password: str) -> str:
    return _password_hash.hash(password)


def verify_password(password: str, encoded: str) -> bool:
    try:
        return _password_hash.verify(password, encoded)
    except UnknownHashError:
        #not a hash any configured hasher recognises
        return False
