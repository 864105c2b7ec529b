"""Selection of the policy namespaces a run evaluates."""


def select_namespaces(available: list[str], prefix: str, all_namespaces: bool) -> list[str]:
    """Pick the namespaces to evaluate from those a policy engine reports.

    With ``all_namespaces`` every namespace is returned unchanged and the
    prefix is ignored. Otherwise the namespaces starting with ``prefix`` are
    returned in their original order; an empty prefix matches everything.

    Args:
        available: Namespaces reported by the engine, in engine order
        prefix: Required namespace prefix
        all_namespaces: Select every namespace

    Returns:
        Selected namespaces, possibly empty
    """
    if all_namespaces:
        return available

    return [namespace for namespace in available if namespace.startswith(prefix)]
