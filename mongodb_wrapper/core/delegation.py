"""
Pass-through delegation to driver handles.

Instead of one hand-written forwarding method per driver operation, wrapper
classes declare the operations they expose as ``PassThrough`` descriptors:

    class MongoCollectionWrapper:
        find = PassThrough("collection")
        aggregate = PassThrough("collection")

Attribute access resolves the driver handle stored on the instance at call
time and returns the driver's own bound method, so arguments and results
(coroutines, cursors, change streams) flow through unmodified. Without a
handle the attribute is a callable that raises NotConnectedError when called.
"""

from typing import Any, List, Optional, Type

from ..exceptions import NotConnectedError


class PassThrough:
    """Descriptor returning a driver method from a handle held by the instance."""

    def __init__(self, handle_attr: str, method_name: Optional[str] = None, doc: Optional[str] = None):
        """Initialize the descriptor.

        Args:
            handle_attr: Instance attribute holding the driver handle
            method_name: Driver method to forward to (defaults to the attribute name)
            doc: Docstring shown for the forwarded operation
        """
        self.handle_attr = handle_attr
        self.method_name = method_name
        self.name = method_name
        self.__doc__ = doc

    def __set_name__(self, owner: Type, name: str) -> None:
        self.name = name
        if self.method_name is None:
            self.method_name = name
        if self.__doc__ is None:
            self.__doc__ = f"Pass-through to the driver's ``{self.method_name}``."

    def __get__(self, instance: Any, owner: Optional[Type] = None) -> Any:
        if instance is None:
            return self
        handle = getattr(instance, self.handle_attr, None)
        if handle is None:
            return self._not_connected
        return getattr(handle, self.method_name)

    def _not_connected(self, *args: Any, **kwargs: Any) -> Any:
        raise NotConnectedError(f"Cannot call {self.name}: not connected.")

    def __repr__(self) -> str:
        return f"PassThrough({self.handle_attr!r}, {self.method_name!r})"


def pass_through_names(cls: Type) -> List[str]:
    """List the pass-through operations a class exposes, in declaration order.

    Args:
        cls: Wrapper class to inspect

    Returns:
        Attribute names bound to PassThrough descriptors
    """
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        for name, value in vars(klass).items():
            if isinstance(value, PassThrough) and name not in names:
                names.append(name)
    return names
