import random
import secrets

PAIRING_CODE_MIN = 100000
PAIRING_CODE_MAX = 999999
DEVICE_TOKEN_BYTES = 32


def generate_pairing_code() -> str:
    # Short-lived and single-use, so a non-cryptographic source is enough.
    return str(random.randint(PAIRING_CODE_MIN, PAIRING_CODE_MAX))


def generate_device_token() -> str:
    return secrets.token_hex(DEVICE_TOKEN_BYTES)
