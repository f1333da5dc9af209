SUPPORTED_SIGNATURE_TYPES = ("ecdsa", "ed25519")


class UnsupportedSignatureTypeError(ValueError):
    def __init__(self, sig_type: str) -> None:
        super().__init__(
            f"Signature type not supported: {sig_type}. Please use ecdsa or ed25519."
        )
        self.sig_type = sig_type


class InvalidSignatureError(Exception):
    pass


class NoMarketDataError(Exception):
    def __init__(self, token_id: str) -> None:
        super().__init__(f"no market data for {token_id}")
        self.token_id = token_id


class InvalidPublicKeyError(ValueError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid action public key: {value}")
        self.value = value
