"""Hierarquia de erros do jwtkeyring."""

from typing import Any, Optional


class AuthTokenError(Exception):
    """Erro base para o jwtkeyring."""


class InvalidKeyIndexError(AuthTokenError, LookupError):
    """Lancado quando um indice nao existe no mapeamento resolvido.

    Indica erro de configuracao (ex.: tres chaves mas apenas dois algoritmos).
    Nunca e tratado pelo fallback de decode.
    """

    def __init__(self, index: Any, kind: str) -> None:
        super().__init__(f"indice {index!r} nao configurado para {kind}")
        self.index = index
        self.kind = kind


class TokenCreationError(AuthTokenError):
    """Lancado quando um token JWT nao pode ser criado."""


class VerificationError(AuthTokenError):
    """Lancado quando um token JWT nao pode ser validado.

    O atributo ``reason`` identifica o tipo de falha de forma estavel.
    """

    reason = "invalid"

    def __init__(self, message: str, reason: Optional[str] = None) -> None:
        super().__init__(message)
        if reason is not None:
            self.reason = reason


class MalformedTokenError(VerificationError):
    """Token ausente ou que nao pode ser decodificado."""

    reason = "malformed"


class SignatureMismatchError(VerificationError):
    """Assinatura (ou algoritmo) nao corresponde a chave usada."""

    reason = "bad_signature"


class ExpiredTokenError(VerificationError):
    """Claim ``exp`` no passado."""

    reason = "expired"


class AudienceMismatchError(VerificationError):
    """Claim ``aud`` nao corresponde ao audience esperado."""

    reason = "invalid_audience"


class NoUsableKeyError(VerificationError):
    """Nenhuma chave configurada para validar o token."""

    reason = "no_key"
