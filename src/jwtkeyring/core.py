"""Servico de emissao e validacao de tokens JWT com multiplas chaves.

Este modulo orquestra a emissao (uma chave) e a validacao (fallback ordenado
por todas as chaves configuradas), permitindo rotacao de chaves e algoritmo
e audience distintos por indice.

Classes principais:
    - TokenCodec: Emissao e validacao de tokens
    - AuthToken: Token emitido ou validado, com suas claims
    - TokenConfig: Configuracao imutavel do servico
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import jwt
from jwt.algorithms import get_default_algorithms

from jwtkeyring.claims import ClaimsPolicy, VerifyOptions
from jwtkeyring.entity import EntityResolver, resolver_for
from jwtkeyring.exceptions import (
    ExpiredTokenError,
    MalformedTokenError,
    NoUsableKeyError,
    TokenCreationError,
    VerificationError,
)
from jwtkeyring.keyring import KeyRing, KeyRingEntry, KeySource, Lazy, as_source, resolve
from jwtkeyring.signing import PyJWTSigner, SigningPrimitive

DEFAULT_ALGORITHM = "HS256"
DEFAULT_LIFETIME = 24 * 60 * 60


@dataclass(frozen=True)
class AuthToken:
    """Token JWT recem-emitido ou validado, com as claims correspondentes."""

    token: str
    payload: Mapping[str, Any] = field(hash=False)
    key_index: int = 0

    def __post_init__(self) -> None:
        payload = copy.deepcopy(dict(self.payload))
        object.__setattr__(self, "payload", MappingProxyType(payload))

    def to_dict(self) -> Dict[str, str]:
        return {"jwt": self.token}

    def to_json(self) -> str:
        """Forma serializada do token: ``{"jwt": "<token>"}``."""
        return json.dumps(self.to_dict())

    def entity_for(self, target: Any) -> Any:
        """Resolve a entidade da aplicacao associada ao payload.

        Args:
            target: Um EntityResolver, ou um tipo que defina ``from_token_payload`` ou ``find``.

        Returns:
            Any: A entidade retornada pelo resolver.
        """
        if not isinstance(target, type) and isinstance(target, EntityResolver):
            resolver = target
        else:
            resolver = resolver_for(target)
        return resolver.resolve(self.payload)


@dataclass(frozen=True)
class TokenConfig:
    """Configuracao do TokenCodec.

    Chaves, algoritmos e audiences aceitam valor unico, lista, dict por indice
    ou callable; os valores sao convertidos para KeySource.
    """

    secret_key: Any = None
    algorithm: Any = DEFAULT_ALGORITHM
    public_key: Any = None
    audience: Any = None
    lifetime: Optional[Union[int, float, timedelta]] = None
    leeway: int = 0

    def __post_init__(self) -> None:
        for name in ("secret_key", "algorithm", "public_key", "audience"):
            object.__setattr__(self, name, as_source(getattr(self, name)))

        _check_static_source(self.secret_key, "JWTKEYRING_SECRET_KEY")
        _check_static_source(self.public_key, "JWTKEYRING_PUBLIC_KEY")
        _check_static_source(self.audience, "JWTKEYRING_AUDIENCE")
        _check_algorithms(self.algorithm)

        if self.lifetime is not None:
            if isinstance(self.lifetime, timedelta):
                seconds = self.lifetime.total_seconds()
            elif isinstance(self.lifetime, (int, float)) and not isinstance(self.lifetime, bool):
                seconds = self.lifetime
            else:
                raise ValueError("JWTKEYRING_LIFETIME deve ser numero de segundos ou timedelta")
            if seconds < 0:
                raise ValueError("JWTKEYRING_LIFETIME deve ser nao negativo")

        if isinstance(self.leeway, bool) or not isinstance(self.leeway, int) or self.leeway < 0:
            raise ValueError("JWTKEYRING_LEEWAY deve ser um inteiro nao negativo")


def _check_static_source(source: KeySource, name: str) -> None:
    # Fontes Lazy so podem ser validadas no momento do uso.
    if isinstance(source, Lazy):
        return
    try:
        resolve(source)
    except ValueError as exc:
        raise ValueError(f"{name}: {exc}") from exc


def _check_algorithms(source: KeySource) -> None:
    if isinstance(source, Lazy):
        return
    _check_static_source(source, "JWTKEYRING_ALGORITHM")
    supported = set(get_default_algorithms()) - {"none"}
    for index, algorithm in resolve(source).items():
        if not isinstance(algorithm, str) or not algorithm.strip():
            raise ValueError(f"JWTKEYRING_ALGORITHM[{index}] deve ser uma string valida")
        if algorithm not in supported:
            raise ValueError(f"JWTKEYRING_ALGORITHM[{index}] não suportado: {algorithm}")


class TokenCodec:
    """Emite e valida tokens JWT usando um KeyRing e uma ClaimsPolicy."""

    def __init__(
        self,
        config: TokenConfig,
        logger: logging.Logger,
        signer: Optional[SigningPrimitive] = None,
    ) -> None:
        """Inicializa o codec.

        Args:
            config (TokenConfig): Configuracoes validadas.
            logger: Logger do servico.
            signer: Primitivo de assinatura; usa PyJWTSigner quando omitido.
        """
        self._config = config
        self._logger = logger
        self._keyring = KeyRing(config.secret_key, config.public_key)
        self._policy = ClaimsPolicy(
            algorithms=config.algorithm,
            audiences=config.audience,
            lifetime=config.lifetime,
        )
        self._signer = signer if signer is not None else PyJWTSigner(leeway=config.leeway)

        logger.debug("TokenCodec inicializado com signer: %s", type(self._signer).__name__)

    @property
    def keyring(self) -> KeyRing:
        return self._keyring

    @property
    def policy(self) -> ClaimsPolicy:
        return self._policy

    def _ensure_jsonable(self, data: Any) -> Any:
        # Valida sem transformar, so garante serializacao.
        try:
            json.dumps(data, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise TokenCreationError("payload nao e serializavel em JSON") from exc
        return data

    def encode(self, payload: Mapping[str, Any], key_index: int = 0) -> AuthToken:
        """Cria um token assinado com a chave ``key_index``.

        Claims padrao (``exp``, ``aud``) sao mescladas sob o payload; campos do
        payload prevalecem.

        Args:
            payload (Mapping[str, Any]): Claims fornecidas pelo chamador.
            key_index (int): Indice da chave/algoritmo de assinatura.

        Returns:
            AuthToken: Token emitido e as claims efetivamente assinadas.

        Raises:
            ValueError: Se payload nao for um mapeamento.
            InvalidKeyIndexError: Se nao houver chave, algoritmo ou audience no indice.
            TokenCreationError: Se o payload nao for serializavel ou a assinatura falhar.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("payload deve ser dict")
        self._ensure_jsonable(dict(payload))

        claims = {**self._policy.default_claims(key_index), **payload}
        key = self._keyring.secret_key(key_index)
        algorithm = self._policy.algorithm(key_index)

        try:
            token = self._signer.sign(claims, key, algorithm)
        except (TypeError, ValueError, NotImplementedError, jwt.PyJWTError) as e:
            self._logger.exception(
                "Falha ao gerar JWT (encode). key_index=%s algorithm=%s", key_index, algorithm
            )
            raise TokenCreationError("Falha ao gerar token") from e
        except Exception as e:
            self._logger.exception(
                "Falha inesperada ao gerar JWT. key_index=%s algorithm=%s", key_index, algorithm
            )
            raise TokenCreationError("Falha inesperada ao gerar token") from e

        return AuthToken(token=token, payload=claims, key_index=key_index)

    def _attempts(
        self, overrides: Optional[Mapping[str, Any]]
    ) -> List[Tuple[KeyRingEntry, VerifyOptions]]:
        return [
            (entry, self._policy.verify_options(entry.index).merged(overrides))
            for entry in self._keyring.decode_keys()
        ]

    def decode(
        self, token: str, verify_options: Optional[Mapping[str, Any]] = None
    ) -> AuthToken:
        """Valida um token tentando cada chave em ordem crescente de indice.

        Apenas o ultimo erro de verificacao e propagado quando todas as chaves
        falham; erros anteriores sao descartados.

        Args:
            token (str): Token JWT a ser validado.
            verify_options (Optional[Mapping[str, Any]]): Sobrescritas parciais de
                VerifyOptions (``algorithm``, ``check_expiration``, ``check_audience``,
                ``audience``) aplicadas a todas as chaves.

        Returns:
            AuthToken: Token e claims verificadas.

        Raises:
            InvalidKeyIndexError: Se faltar algoritmo ou audience para alguma chave.
            VerificationError: Se nenhuma chave validar o token.
        """
        if not isinstance(token, str) or not token.strip():
            raise MalformedTokenError("Token ausente", reason="missing_token")

        attempts = self._attempts(verify_options)
        error: VerificationError = NoUsableKeyError("Nenhuma chave configurada para validar JWT")

        for entry, options in attempts:
            try:
                payload = self._signer.verify(token, entry.key, options)
            except VerificationError as exc:
                self._logger.debug(
                    "JWT rejeitado pela chave %s: %s", entry.index, exc.reason
                )
                error = exc
                continue
            except Exception as exc:
                self._logger.exception("Falha inesperada ao decodificar JWT (chave %s)", entry.index)
                raise VerificationError(
                    "Falha inesperada ao validar token", reason="internal"
                ) from exc
            return AuthToken(token=token, payload=payload, key_index=entry.index)

        if isinstance(error, ExpiredTokenError):
            self._logger.info("JWT expirado")
        else:
            self._logger.warning("JWT inválido (%s) apos %d chave(s)", error.reason, len(attempts))
        raise error


def load_token_config_from_dict(app_config: Mapping[str, Any]) -> TokenConfig:
    """Carrega configuracoes do TokenCodec a partir de um dict.

    O dict nao e modificado. ``JWTKEYRING_LIFETIME`` explicitamente ``None``
    desativa a expiracao.

    Args:
        app_config: Dicionario de configuracao da aplicacao.

    Returns:
        TokenConfig: Configuracao validada do servico.
    """
    secret_key = app_config.get("JWTKEYRING_SECRET_KEY", app_config.get("SECRET_KEY"))

    lifetime = app_config.get("JWTKEYRING_LIFETIME", DEFAULT_LIFETIME)
    if lifetime is not None and not isinstance(lifetime, (timedelta, float, bool)):
        lifetime = int(lifetime)

    return TokenConfig(
        secret_key=secret_key,
        algorithm=app_config.get("JWTKEYRING_ALGORITHM") or DEFAULT_ALGORITHM,
        public_key=app_config.get("JWTKEYRING_PUBLIC_KEY"),
        audience=app_config.get("JWTKEYRING_AUDIENCE"),
        lifetime=lifetime,
        leeway=int(app_config.get("JWTKEYRING_LEEWAY") or 0),
    )
