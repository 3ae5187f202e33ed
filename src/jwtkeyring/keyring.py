"""Resolucao de fontes de chaves e conjuntos de chaves indexadas.

Qualquer valor configuravel (chave secreta, chave publica, algoritmo,
audience) pode ser informado como valor unico, lista, mapeamento por indice
ou callback. Todas as formas sao reduzidas a um ``Dict[int, Any]`` por
:func:`resolve`.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Sequence, Union

from jwtkeyring.exceptions import InvalidKeyIndexError


@dataclass(frozen=True)
class Single:
    """Um unico valor, associado ao indice 0."""

    value: Any


@dataclass(frozen=True)
class Listed:
    """Sequencia de valores indexada a partir de 0."""

    values: Sequence[Any]


@dataclass(frozen=True)
class Indexed:
    """Mapeamento explicito de indice para valor."""

    values: Mapping[int, Any]


@dataclass(frozen=True)
class Lazy:
    """Callback sem argumentos avaliado a cada resolucao."""

    factory: Callable[[], Any]


KeySource = Union[Single, Listed, Indexed, Lazy]


def as_source(raw: Any) -> KeySource:
    """Converte um valor bruto de configuracao em uma variante de KeySource."""
    if isinstance(raw, (Single, Listed, Indexed, Lazy)):
        return raw
    if isinstance(raw, Mapping):
        return Indexed(dict(raw))
    if isinstance(raw, (list, tuple)):
        return Listed(list(raw))
    if callable(raw):
        return Lazy(raw)
    return Single(raw)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, bytes):
        return not value
    return False


def resolve(source: Any) -> Dict[int, Any]:
    """Resolve uma fonte em um mapeamento ``indice -> valor``.

    Args:
        source: Variante de KeySource ou valor bruto (convertido por :func:`as_source`).

    Returns:
        Dict[int, Any]: Mapeamento resolvido; vazio quando nada esta configurado.

    Raises:
        ValueError: Se um mapeamento usar indices que nao sejam inteiros nao negativos.
    """
    source = as_source(source)

    if isinstance(source, Lazy):
        return resolve(source.factory())

    if isinstance(source, Indexed):
        for index in source.values:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ValueError(f"indice deve ser um inteiro nao negativo: {index!r}")
        return dict(source.values)

    if isinstance(source, Listed):
        return {index: value for index, value in enumerate(source.values)}

    if _is_blank(source.value):
        return {}
    return {0: source.value}


def lookup(source: Any, index: int, kind: str) -> Any:
    """Resolve ``source`` e retorna o valor em ``index``.

    Raises:
        InvalidKeyIndexError: Se o indice nao existir no mapeamento resolvido.
    """
    values = resolve(source)
    if index not in values:
        raise InvalidKeyIndexError(index, kind)
    return values[index]


@dataclass(frozen=True)
class KeyRingEntry:
    """Chave candidata para validacao em um indice."""

    index: int
    key: Any
    secret_key: Any = None
    public_key: Any = None


class KeyRing:
    """Conjunto de chaves secretas e publicas indexadas.

    Nada e mantido em cache: fontes ``Lazy`` sao reavaliadas a cada chamada.
    """

    def __init__(self, secret_keys: Any = None, public_keys: Any = None) -> None:
        self._secret_source = as_source(secret_keys)
        self._public_source = as_source(public_keys)

    def secret_keys(self) -> Dict[int, Any]:
        return resolve(self._secret_source)

    def public_keys(self) -> Dict[int, Any]:
        return resolve(self._public_source)

    def secret_key(self, index: int = 0) -> Any:
        """Retorna a chave de assinatura do indice.

        Raises:
            InvalidKeyIndexError: Se nao houver chave secreta nesse indice.
        """
        return lookup(self._secret_source, index, "secret_key")

    def decode_keys(self) -> List[KeyRingEntry]:
        """Combina chaves secretas e publicas em ordem crescente de indice.

        Em indices repetidos a chave publica substitui a secreta.
        """
        secrets = self.secret_keys()
        publics = self.public_keys()
        merged = {**secrets, **publics}
        return [
            KeyRingEntry(
                index=index,
                key=merged[index],
                secret_key=secrets.get(index),
                public_key=publics.get(index),
            )
            for index in sorted(merged)
        ]
