from __future__ import annotations

"""
Typed handler callables.

`handler()` and `void_handler()` turn a handler name plus a fixed list of
argument types into a Python callable. Types are resolved to codecs once, at
construction; whether the script really defines a handler with that name and
arity is only discovered when the callable is invoked.

Examples
--------
>>> add = handler(script, "add", (int, int), int)
>>> add(2, 3)
5
>>> notify = void_handler(script, "notify", (str,))
>>> notify("done")
"""

from typing import Any, List, Optional, Sequence, Union

from ashandler.codec import Codec, CodecRegistry, get_default_registry
from ashandler.runtime.dispatch import dispatch
from ashandler.runtime.event_builder import build_event, normalize_handler_name
from ashandler.runtime.script import ScriptResource
from ashandler.types.config import CallConfig
from ashandler.types.descriptor import Descriptor


class _HandlerBase:
    def __init__(
        self,
        script: ScriptResource,
        name: str,
        argument_types: Sequence[Any],
        config: Union[None, dict[str, Any], CallConfig] = None,
        registry: Optional[CodecRegistry] = None,
    ) -> None:
        self.config = CallConfig.from_obj(config)
        # validated up front; normalization happens again in build_event
        normalize_handler_name(name, self.config)
        self.name = name
        # strong reference: every call re-enters the script
        self.script = script
        self.registry = registry if registry is not None else get_default_registry()
        self.argument_codecs: List[Codec] = [
            self.registry.resolve(t) for t in argument_types
        ]

    @property
    def arity(self) -> int:
        return len(self.argument_codecs)

    def _send(self, args: tuple) -> Descriptor:
        if len(args) != self.arity:
            raise TypeError(
                f"handler {self.name!r} takes {self.arity} argument(s) "
                f"but {len(args)} were given"
            )
        packed = Descriptor.list()
        for codec, arg in zip(self.argument_codecs, args):
            packed.insert(codec.encode(arg), 0)
        return dispatch(self.script, build_event(self.name, packed, self.config))

    def _signature(self) -> str:
        return ", ".join(c.type_name for c in self.argument_codecs)


class TypedHandler(_HandlerBase):
    """
    Callable running one script handler with typed arguments and result.

    Parameters
    ----------
    script : ScriptResource
        Script holding the handler. Kept alive by this object.
    name : str
        Handler name.
    argument_types : sequence
        Types, type hints or codecs of the positional arguments, in order.
    return_type : type, hint or codec
        Type the result is decoded as.
    config : CallConfig or dict, optional
        Call options.
    registry : CodecRegistry, optional
        Registry used to resolve the types; defaults to the global registry.

    Raises
    ------
    TypeError
        At construction, if a type has no codec; at call time, if the number
        of arguments does not match ``argument_types``.
    ConversionError
        If an argument or the result cannot be converted.
    RuntimeInvocationError
        If the script fails the call.
    """

    def __init__(
        self,
        script: ScriptResource,
        name: str,
        argument_types: Sequence[Any] = (),
        return_type: Any = Descriptor,
        config: Union[None, dict[str, Any], CallConfig] = None,
        registry: Optional[CodecRegistry] = None,
    ) -> None:
        super().__init__(script, name, argument_types, config, registry)
        self.return_codec: Codec = self.registry.resolve(return_type)

    def __call__(self, *args: Any) -> Any:
        return self.return_codec.decode(self._send(args))

    def __repr__(self) -> str:
        return (
            f"<TypedHandler {self.name}({self._signature()}) "
            f"-> {self.return_codec.type_name}>"
        )


class VoidHandler(_HandlerBase):
    """
    Callable running one script handler and discarding its result.

    Same parameters as `TypedHandler`, without ``return_type``. The call
    still fails if the dispatch fails.
    """

    def __call__(self, *args: Any) -> None:
        self._send(args)

    def __repr__(self) -> str:
        return f"<VoidHandler {self.name}({self._signature()})>"


def handler(
    script: ScriptResource,
    name: str,
    argument_types: Sequence[Any] = (),
    return_type: Any = Descriptor,
    *,
    config: Union[None, dict[str, Any], CallConfig] = None,
    registry: Optional[CodecRegistry] = None,
) -> TypedHandler:
    """Return a `TypedHandler` for ``name`` in ``script``."""
    return TypedHandler(script, name, argument_types, return_type, config, registry)


def void_handler(
    script: ScriptResource,
    name: str,
    argument_types: Sequence[Any] = (),
    *,
    config: Union[None, dict[str, Any], CallConfig] = None,
    registry: Optional[CodecRegistry] = None,
) -> VoidHandler:
    """Return a `VoidHandler` for ``name`` in ``script``."""
    return VoidHandler(script, name, argument_types, config, registry)
