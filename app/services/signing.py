from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from app.errors import (
    SUPPORTED_SIGNATURE_TYPES,
    InvalidPublicKeyError,
    InvalidSignatureError,
    UnsupportedSignatureTypeError,
)

SIGNATURE_TIMESTAMP_HEADER = "x-signature-timestamp"
SIGNATURE_HEADERS = {
    "ed25519": "x-signature-ed25519",
    "ecdsa": "x-signature-ecdsa",
}
DEFAULT_SIGNATURE_TYPE = "ed25519"


@dataclass(frozen=True)
class KeyPair:
    sig_type: str
    private_key: str
    public_key: str

    @property
    def signing_key(self) -> str:
        return f"{self.sig_type}:{self.private_key}"

    @property
    def qualified_public_key(self) -> str:
        return f"{self.sig_type}:{self.public_key}"


def _ensure_supported(sig_type: str) -> str:
    if sig_type not in SUPPORTED_SIGNATURE_TYPES:
        raise UnsupportedSignatureTypeError(sig_type)
    return sig_type


def generate_key_pair(sig_type: str = DEFAULT_SIGNATURE_TYPE) -> KeyPair:
    _ensure_supported(sig_type)
    if sig_type == "ed25519":
        signing_key = SigningKey.generate()
        return KeyPair(
            sig_type=sig_type,
            private_key=bytes(signing_key).hex(),
            public_key=bytes(signing_key.verify_key).hex(),
        )

    private_key = ec.generate_private_key(ec.SECP256K1())
    return KeyPair(
        sig_type=sig_type,
        private_key=private_key.private_numbers().private_value.to_bytes(32, "big").hex(),
        public_key=_ecdsa_public_hex(private_key.public_key()),
    )


def _ecdsa_public_hex(public_key: ec.EllipticCurvePublicKey) -> str:
    return public_key.public_bytes(Encoding.X962, PublicFormat.UncompressedPoint).hex()


def _load_verifier(sig_type: str, key: str):
    if sig_type == "ed25519":
        return VerifyKey(bytes.fromhex(key))
    return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), bytes.fromhex(key))


def parse_public_key(value: str) -> tuple[str, str]:
    """Split `<type>:<hex>` into its parts; bare hex is an Ed25519 key.

    Raises InvalidPublicKeyError when the key does not decode for its type.
    """
    raw = value.strip()
    if ":" in raw:
        sig_type, key = raw.split(":", 1)
        sig_type = _ensure_supported(sig_type.lower())
    else:
        sig_type, key = DEFAULT_SIGNATURE_TYPE, raw
    try:
        _load_verifier(sig_type, key)
    except ValueError as exc:
        raise InvalidPublicKeyError(value) from exc
    return sig_type, key


def sign_request(private_key: str, sig_type: str, timestamp: str, body: bytes) -> str:
    message = timestamp.encode() + body
    if _ensure_supported(sig_type) == "ed25519":
        return SigningKey(bytes.fromhex(private_key)).sign(message).signature.hex()

    key = ec.derive_private_key(int(private_key, 16), ec.SECP256K1())
    return key.sign(message, ec.ECDSA(hashes.SHA256())).hex()


def verify_request_signature(public_key: str, headers: Mapping[str, str], body: bytes) -> str:
    """Check the action request signature; returns the signature type that matched."""
    sig_type, key = parse_public_key(public_key)
    lowered = {k.lower(): v for k, v in headers.items()}
    timestamp = lowered.get(SIGNATURE_TIMESTAMP_HEADER)
    signature = lowered.get(SIGNATURE_HEADERS[sig_type])
    if not timestamp or not signature:
        raise InvalidSignatureError(f"missing {sig_type} signature headers")

    message = timestamp.encode() + body
    verifier = _load_verifier(sig_type, key)
    try:
        if sig_type == "ed25519":
            verifier.verify(message, bytes.fromhex(signature))
        else:
            verifier.verify(bytes.fromhex(signature), message, ec.ECDSA(hashes.SHA256()))
    except (BadSignatureError, InvalidSignature, ValueError) as exc:
        raise InvalidSignatureError(f"invalid {sig_type} signature") from exc
    return sig_type
