"""Claims padrao na emissao e opcoes de verificacao por indice de chave."""

import time
from dataclasses import dataclass, fields, replace
from datetime import timedelta
from typing import Any, Callable, Dict, Mapping, Optional, Union

from jwtkeyring.exceptions import InvalidKeyIndexError
from jwtkeyring.keyring import as_source, lookup, resolve


@dataclass(frozen=True)
class VerifyOptions:
    """Opcoes repassadas ao primitivo de verificacao."""

    algorithm: str
    check_expiration: bool = False
    check_audience: bool = False
    audience: Any = None

    def merged(self, overrides: Optional[Mapping[str, Any]] = None) -> "VerifyOptions":
        """Retorna uma copia com ``overrides`` aplicados por cima.

        Raises:
            ValueError: Se alguma opcao informada nao existir.
        """
        if not overrides:
            return self
        known = {field.name for field in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"opcoes de verificacao desconhecidas: {', '.join(unknown)}")
        return replace(self, **overrides)


class ClaimsPolicy:
    """Calcula ``exp``/``aud`` padrao e as opcoes de verificacao de cada chave."""

    def __init__(
        self,
        algorithms: Any = "HS256",
        audiences: Any = None,
        lifetime: Optional[Union[int, float, timedelta]] = None,
        time_fn: Optional[Callable[[], float]] = None,
    ) -> None:
        self._algorithm_source = as_source(algorithms)
        self._audience_source = as_source(audiences)
        if isinstance(lifetime, timedelta):
            lifetime = lifetime.total_seconds()
        self._lifetime = lifetime
        self._time_fn = time_fn

    def _get_now(self) -> float:
        if self._time_fn is not None:
            return self._time_fn()
        return time.time()

    @property
    def check_expiration(self) -> bool:
        return self._lifetime is not None

    @property
    def check_audience(self) -> bool:
        return bool(resolve(self._audience_source))

    def algorithm(self, index: int = 0) -> str:
        return lookup(self._algorithm_source, index, "algorithm")

    def audience(self, index: int = 0) -> Any:
        """Audience do indice, ou None quando nenhum audience esta configurado."""
        audiences = resolve(self._audience_source)
        if not audiences:
            return None
        if index not in audiences:
            raise InvalidKeyIndexError(index, "audience")
        return audiences[index]

    def default_claims(self, index: int = 0) -> Dict[str, Any]:
        """Claims injetadas na emissao de um token assinado pela chave ``index``.

        O ``aud`` embutido e o audience do proprio ``index`` (e nao sempre o do
        indice 0), para que o token valide com a chave que o assinou quando
        cada chave tem seu audience. Com ``index=0`` o resultado e o mesmo.

        Raises:
            InvalidKeyIndexError: Se houver audiences configurados mas nenhum em ``index``.
        """
        claims: Dict[str, Any] = {}
        if self.check_expiration:
            claims["exp"] = int(self._get_now() + self._lifetime)
        audience = self.audience(index)
        if audience is not None:
            claims["aud"] = audience
        return claims

    def verify_options(self, index: int) -> VerifyOptions:
        audience = self.audience(index)
        return VerifyOptions(
            algorithm=self.algorithm(index),
            check_expiration=self.check_expiration,
            check_audience=audience is not None,
            audience=audience,
        )
