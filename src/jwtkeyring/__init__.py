"""Emissao e validacao de tokens JWT com rotacao de chaves."""

from jwtkeyring.claims import ClaimsPolicy, VerifyOptions
from jwtkeyring.core import AuthToken, TokenCodec, TokenConfig, load_token_config_from_dict
from jwtkeyring.entity import EntityResolver, FromIdentifier, FromPayload, resolver_for
from jwtkeyring.exceptions import (
    AudienceMismatchError,
    AuthTokenError,
    ExpiredTokenError,
    InvalidKeyIndexError,
    MalformedTokenError,
    NoUsableKeyError,
    SignatureMismatchError,
    TokenCreationError,
    VerificationError,
)
from jwtkeyring.keyring import (
    Indexed,
    KeyRing,
    KeyRingEntry,
    KeySource,
    Lazy,
    Listed,
    Single,
    as_source,
    resolve,
)
from jwtkeyring.signing import PyJWTSigner, SigningPrimitive

__all__ = [
    "__version__",
    "AuthToken",
    "TokenCodec",
    "TokenConfig",
    "load_token_config_from_dict",
    "ClaimsPolicy",
    "VerifyOptions",
    "KeyRing",
    "KeyRingEntry",
    "KeySource",
    "Single",
    "Listed",
    "Indexed",
    "Lazy",
    "as_source",
    "resolve",
    "SigningPrimitive",
    "PyJWTSigner",
    "EntityResolver",
    "FromPayload",
    "FromIdentifier",
    "resolver_for",
    "AuthTokenError",
    "InvalidKeyIndexError",
    "TokenCreationError",
    "VerificationError",
    "MalformedTokenError",
    "SignatureMismatchError",
    "ExpiredTokenError",
    "AudienceMismatchError",
    "NoUsableKeyError",
]

__version__ = "0.1.0"
