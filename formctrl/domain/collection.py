"""CtrlCollection: ordered, optionally named groups of controls.

Collections nest: an element is either a `Ctrl` or another `CtrlCollection`.
Named sub-collections scope lookups and become nested objects when
serialized; anonymous ones flatten into their parent.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from formctrl.formats.registry import FormatRegistry

from .ctrl import Ctrl
from .enums import ControlType
from .errors import DomainError
from .messages import DefaultMessages
from .ports import DiagnosticsPort, default_diagnostics
from .props import validate_ctrl_props
from .types import ControlProps

Element = Union[Ctrl, "CtrlCollection"]


class CtrlCollection:
    """
    Group of `Ctrl` instances for forms or other uses.

    Names are not required to be unique: lookups walk the tree depth-first
    and the first match wins.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        formats: Optional[FormatRegistry] = None,
        diagnostics: Optional[DiagnosticsPort] = None,
        messages: Optional[DefaultMessages] = None,
    ) -> None:
        """
        Initialize an empty collection.

        Args:
            name: Optional name, used to address this collection when nested
            formats: Format registry handed to the controls built here
            diagnostics: Port receiving non-fatal diagnostics
            messages: Message catalog handed to the controls built here
        """
        self.name: Optional[str] = name or None
        # Summary refreshed by validate()
        self.message: Optional[str] = None
        self.required: List[str] = []
        self._formats = formats
        self._diagnostics = diagnostics or default_diagnostics()
        self._messages = messages
        self._elements: List[Element] = []

    @property
    def collection(self) -> Tuple[Element, ...]:
        """Read-only view of the elements."""
        return tuple(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"CtrlCollection(name={self.name!r}, size={len(self._elements)})"

    def add(self, control_args: Any) -> Optional["CtrlCollection"]:
        """
        Add a control or sub-collection.

        Accepts a `Ctrl`, a `CtrlCollection`, a blueprint (mapping or
        `ControlProps`) or a list of those, which becomes a new anonymous
        sub-collection.

        Args:
            control_args: Element, blueprint or list of blueprints to add

        Returns:
            This collection, or None when the argument was rejected
        """
        if control_args is None:
            self._reject("empty")
            return None

        if isinstance(control_args, (Ctrl, CtrlCollection)):
            self._elements.append(control_args)
            return self

        if isinstance(control_args, (list, tuple)):
            sub_collection = self._spawn()
            for item in control_args:
                sub_collection.add(item)
            self._elements.append(sub_collection)
            return self

        if not isinstance(control_args, (Mapping, ControlProps)):
            self._reject("unsupported_type", arg_type=type(control_args).__name__)
            return None

        if not validate_ctrl_props(control_args):
            self._reject("missing_name")
            return None

        try:
            control = Ctrl(
                control_args,
                formats=self._formats,
                diagnostics=self._diagnostics,
                messages=self._messages,
            )
        except DomainError as e:
            self._reject("invalid_blueprint", error=e.message)
            return None

        self._elements.append(control)
        return self

    def get(self, name: str, sub_collection: Optional[str] = None) -> Union[Element, bool]:
        """
        Retrieve a control from this collection or any nested one.

        Without a scope, sub-collections are searched before the element's
        own name is compared.

        Args:
            name: Control name to search for
            sub_collection: Restrict the search to the nested collection with
                this name

        Returns:
            The element found, or False
        """
        if sub_collection:
            scope = self._find_scope(sub_collection)
            return scope.get(name) if scope is not None else False

        for current in self._elements:
            if isinstance(current, CtrlCollection):
                found = current.get(name)
                if found is not False:
                    return found
            if current.name == name:
                return current

        return False

    def get_value(self, name: str, sub_collection: Optional[str] = None) -> Any:
        """
        Retrieve the value of a control.

        Returns:
            The control value, or None when nothing is found or the name
            points at a collection
        """
        found = self.get(name, sub_collection)
        if isinstance(found, Ctrl):
            return found.value
        return None

    def set(self, control: Ctrl, sub_collection: Optional[str] = None) -> "CtrlCollection":
        """
        Replace the control with the same name, or append it when missing.

        Args:
            control: Control to set
            sub_collection: Name of the nested collection to set it in

        Returns:
            This collection
        """
        if sub_collection:
            scope = self._find_scope(sub_collection)
            if scope is not None:
                scope.set(control)
                return self
            self._elements.append(control)
            return self

        if not self._replace(control):
            self._elements.append(control)
        return self

    def set_value(
        self,
        name: str,
        value: Any,
        sub_collection: Optional[str] = None,
    ) -> "CtrlCollection":
        """
        Set the value of a single control, filtered by its type.

        Args:
            name: Control name
            value: Value to set
            sub_collection: Name of the nested collection holding the control

        Returns:
            This collection
        """
        found = self.get(name, sub_collection)
        if not isinstance(found, Ctrl):
            self._diagnostics.warning(
                "collection_set_value_missed",
                collection=self.name,
                control=name,
                sub_collection=sub_collection,
            )
            return self

        found.assign_value(value)
        return self.set(found, sub_collection)

    def remove(self, name: str, sub_collection: Optional[str] = None) -> "CtrlCollection":
        """
        Remove the first element matching `name`; no-op when nothing matches.

        Args:
            name: Control name
            sub_collection: Name of the nested collection holding the control

        Returns:
            This collection
        """
        if sub_collection:
            scope = self._find_scope(sub_collection)
            if scope is not None:
                scope.remove(name)
            return self

        self._remove_first(name)
        return self

    def validate(self) -> bool:
        """
        Validate every element, without stopping at the first failure.

        Also refreshes `message` (messages of failing hidden controls and
        sub-collections) and `required` (names of failing required controls).
        """
        status = True
        messages: List[str] = []
        required: List[str] = []

        for current in self._elements:
            valid = current.validate()

            if not valid:
                if isinstance(current, Ctrl):
                    if current.type == ControlType.HIDDEN:
                        messages.append(current.message)
                    elif current.required:
                        required.append(current.name)
                else:
                    if current.message:
                        messages.append(current.message)
                    required.extend(current.required)

            status = valid and status

        self.message = "\r\n".join(messages) if messages else None
        self.required = required

        return status

    def invalidate(
        self,
        name: str,
        message: str = "",
        sub_collection: Optional[str] = None,
    ) -> "CtrlCollection":
        """
        Force invalidation of a single control.

        Args:
            name: Control to invalidate
            message: Invalidation message
            sub_collection: Name of the nested collection holding the control

        Returns:
            This collection
        """
        found = self.get(name, sub_collection)
        if isinstance(found, Ctrl):
            found.invalidate(message)
        else:
            self._diagnostics.warning(
                "collection_invalidate_missed",
                collection=self.name,
                control=name,
                sub_collection=sub_collection,
            )
        return self

    def invalidate_all(self) -> "CtrlCollection":
        """
        Force invalidation of every control, with the generic message.

        IMPORTANT: use with care, every field of the form shows an error.
        """
        for current in self._elements:
            if isinstance(current, CtrlCollection):
                current.invalidate_all()
            else:
                current.invalidate()
        return self

    def to_object(self, use_alias: bool = False) -> Dict[str, Any]:
        """Alias for `to_json()`."""
        return self.to_json(use_alias)

    def to_json(self, use_alias: bool = False) -> Dict[str, Any]:
        """
        Plain name -> value payload of the whole tree.

        Args:
            use_alias: Use the control alias as key when it is declared

        Returns:
            Dictionary where named sub-collections nest and anonymous ones
            flatten into this level
        """
        payload: Dict[str, Any] = {}

        for current in self._elements:
            if isinstance(current, CtrlCollection):
                if current.name:
                    payload[current.name] = current.to_json(use_alias)
                else:
                    payload.update(current.to_json(use_alias))
            elif use_alias and current.alias:
                payload[current.alias] = current.value
            else:
                payload[current.name] = current.value

        return payload

    def _spawn(self) -> "CtrlCollection":
        """Anonymous sub-collection sharing this collection's collaborators."""
        return CtrlCollection(
            formats=self._formats,
            diagnostics=self._diagnostics,
            messages=self._messages,
        )

    def _find_scope(self, sub_collection: str) -> Optional["CtrlCollection"]:
        for current in self._elements:
            if isinstance(current, CtrlCollection) and current.name == sub_collection:
                return current
        return None

    def _replace(self, control: Ctrl) -> bool:
        for index, current in enumerate(self._elements):
            if isinstance(current, CtrlCollection) and current._replace(control):
                return True
            if current.name == control.name:
                self._elements[index] = control
                return True
        return False

    def _remove_first(self, name: str) -> bool:
        for index, current in enumerate(self._elements):
            if isinstance(current, CtrlCollection) and current._remove_first(name):
                return True
            if current.name == name:
                del self._elements[index]
                return True
        return False

    def _reject(self, reason: str, **fields: Any) -> None:
        self._diagnostics.warning(
            "collection_add_rejected",
            collection=self.name,
            reason=reason,
            **fields,
        )
