"""Resolucao de entidades da aplicacao a partir de claims verificadas."""

from typing import Any, Callable, Mapping, Protocol, runtime_checkable


@runtime_checkable
class EntityResolver(Protocol):
    """Interface para mapear um payload em um objeto de dominio."""

    def resolve(self, payload: Mapping[str, Any]) -> Any:
        """Retorna a entidade correspondente ao payload.

        Args:
            payload (Mapping[str, Any]): Claims verificadas do token.

        Returns:
            Any: Entidade da aplicacao (ou o que o callback retornar).
        """


class FromPayload:
    """Constroi a entidade a partir do payload completo."""

    def __init__(self, factory: Callable[[Mapping[str, Any]], Any]) -> None:
        self._factory = factory

    def resolve(self, payload: Mapping[str, Any]) -> Any:
        return self._factory(payload)


class FromIdentifier:
    """Busca a entidade pelo identificador em uma claim (``sub`` por padrao)."""

    def __init__(self, finder: Callable[[Any], Any], claim: str = "sub") -> None:
        self._finder = finder
        self._claim = claim

    def resolve(self, payload: Mapping[str, Any]) -> Any:
        return self._finder(payload.get(self._claim))


def resolver_for(entity_type: Any) -> EntityResolver:
    """Escolhe a estrategia suportada por ``entity_type``.

    Usa ``from_token_payload`` quando existir; caso contrario ``find`` com a claim ``sub``.

    Raises:
        TypeError: Se o tipo nao oferecer nenhuma das duas capacidades.
    """
    factory = getattr(entity_type, "from_token_payload", None)
    if callable(factory):
        return FromPayload(factory)

    finder = getattr(entity_type, "find", None)
    if callable(finder):
        return FromIdentifier(finder)

    raise TypeError(f"{entity_type!r} nao define from_token_payload nem find")
