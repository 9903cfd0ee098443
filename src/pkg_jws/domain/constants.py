from enum import Enum

DEFAULT_KEYSET = "default"


class KeyUse(Enum):
    SIGN = "sign"
    VERIFY = "verify"
