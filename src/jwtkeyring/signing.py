"""Primitivo de assinatura e verificacao de tokens."""

from typing import Any, Dict, Mapping, Protocol

import jwt

from jwtkeyring.claims import VerifyOptions
from jwtkeyring.exceptions import (
    AudienceMismatchError,
    ExpiredTokenError,
    MalformedTokenError,
    SignatureMismatchError,
    VerificationError,
)


class SigningPrimitive(Protocol):
    """Interface para primitivos de assinatura."""

    def sign(self, claims: Mapping[str, Any], key: Any, algorithm: str) -> str:
        """Assina as claims e retorna o token compacto.

        Args:
            claims (Mapping[str, Any]): Claims a serem assinadas.
            key (Any): Chave de assinatura (segredo HMAC ou chave privada).
            algorithm (str): Algoritmo JWS.

        Returns:
            str: Token codificado.
        """

    def verify(self, token: str, key: Any, options: VerifyOptions) -> Dict[str, Any]:
        """Valida o token com uma chave e retorna as claims.

        Args:
            token (str): Token a ser validado.
            key (Any): Chave de verificacao.
            options (VerifyOptions): Algoritmo esperado e checagens de exp/aud.

        Returns:
            Dict[str, Any]: Claims verificadas.

        Raises:
            VerificationError: Se o token nao for valido para essa chave.
        """


class PyJWTSigner:
    """Primitivo baseado no PyJWT (HMAC, RSA, EC, EdDSA)."""

    def __init__(self, leeway: int = 0) -> None:
        self._leeway = leeway

    def sign(self, claims: Mapping[str, Any], key: Any, algorithm: str) -> str:
        token = jwt.encode(payload=dict(claims), key=key, algorithm=algorithm)
        if isinstance(token, bytes):
            token = token.decode("utf-8")
        return token

    def verify(self, token: str, key: Any, options: VerifyOptions) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                key=key,
                algorithms=[options.algorithm],
                leeway=self._leeway,
                audience=options.audience if options.check_audience else None,
                options={
                    "verify_exp": options.check_expiration,
                    "verify_aud": options.check_audience,
                    # sub/jti podem ser numericos (ex.: id do usuario).
                    "verify_sub": False,
                    "verify_jti": False,
                },
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError("JWT expirado") from exc
        except jwt.InvalidAudienceError as exc:
            raise AudienceMismatchError("Audience inválido no JWT") from exc
        except jwt.InvalidSignatureError as exc:
            raise SignatureMismatchError("Assinatura inválida no JWT") from exc
        except jwt.InvalidAlgorithmError as exc:
            raise SignatureMismatchError(
                "Algoritmo do JWT nao corresponde a chave", reason="invalid_algorithm"
            ) from exc
        except jwt.ImmatureSignatureError as exc:
            raise VerificationError("JWT ainda não válido", reason="immature") from exc
        except jwt.MissingRequiredClaimError as exc:
            raise VerificationError(
                f"Claim obrigatoria ausente: {exc.claim}", reason="missing_claim"
            ) from exc
        except jwt.DecodeError as exc:
            raise MalformedTokenError("JWT mal formado") from exc
        except jwt.InvalidKeyError as exc:
            raise VerificationError("Chave inadequada para o algoritmo", reason="invalid_key") from exc
        except jwt.PyJWTError as exc:
            raise VerificationError("JWT inválido") from exc
