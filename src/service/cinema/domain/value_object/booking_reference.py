import secrets


class BookingReference:
    # 5 random bytes -> 10 hex chars, no counter and no global lock
    TOKEN_BYTES = 5

    @classmethod
    def generate(cls, prefix: str) -> str:
        return f'{prefix}-{secrets.token_hex(cls.TOKEN_BYTES).upper()}'
