"""
Action-based filtering of bundle parameters and outputs.

Parameters and outputs carry an optional ``applyTo`` list naming the actions
(install, upgrade, a custom action, ...) they are relevant to. An absent or
empty list means the item applies to every action.
"""

from typing import Any, List, Mapping, Optional

from .types import BundleDict


def applies_to(action_name: str, item: Mapping[str, Any]) -> bool:
    """
    Check whether a parameter or output applies to an action.

    Args:
        action_name: Action name; matched exactly, case-sensitive
        item: Parameter or output dictionary

    Returns:
        True if ``applyTo`` is absent, empty or a list containing
        ``action_name``; False for any other ``applyTo`` value
    """
    apply_to = item.get("applyTo")
    if not apply_to:
        return True
    # A bare string would otherwise match by substring ("stall" in "install")
    if not isinstance(apply_to, list):
        return False
    return action_name in apply_to


def _names_for_action(items: Optional[Mapping[str, Any]], action_name: str) -> List[str]:
    if not items:
        return []
    return [name for name, item in items.items() if applies_to(action_name, item)]


def parameters_for_action(bundle: BundleDict, action_name: str) -> List[str]:
    """
    Get the parameters applicable to a specific action, such as 'install'.

    Args:
        bundle: The bundle from which to get parameters
        action_name: The action whose parameters you are requesting

    Returns:
        Names of the parameters which apply to the action, in declaration order
    """
    return _names_for_action(bundle.get("parameters"), action_name)


def outputs_for_action(bundle: BundleDict, action_name: str) -> List[str]:
    """
    Get the outputs produced by a specific action.

    Args:
        bundle: The bundle from which to get outputs
        action_name: The action whose outputs you are requesting

    Returns:
        Names of the outputs which apply to the action, in declaration order
    """
    return _names_for_action(bundle.get("outputs"), action_name)


def is_required(bundle: BundleDict, parameter_name: str) -> bool:
    """
    Get whether a particular parameter must be specified.

    Missing parameters sections and unknown names resolve to False.

    Args:
        bundle: The bundle containing the parameters
        parameter_name: The name of the parameter to check

    Returns:
        Whether the parameter is required
    """
    parameters = bundle.get("parameters")
    if not parameters:
        return False

    parameter = parameters.get(parameter_name)
    if not parameter:
        return False

    # Only a JSON true counts; "false" or 1 are not required
    return parameter.get("required") is True
