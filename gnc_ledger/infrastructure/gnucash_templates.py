"""Recognition of GnuCash scheduled-transaction templates.

GnuCash stores scheduled-transaction templates next to the real ledger: a
second root named ``Template Root`` whose accounts use the ``template``
commodity. Sources leave them out so the book keeps a single root.
"""

TEMPLATE_NAMESPACE = "template"
TEMPLATE_ROOT_NAME = "Template Root"


def is_template_namespace(namespace: str | None) -> bool:
    return (namespace or "").lower() == TEMPLATE_NAMESPACE


def is_template_account(
    name: str | None,
    account_type: str | None,
    namespace: str | None,
) -> bool:
    """Return True for the template root and accounts below it."""
    if is_template_namespace(namespace):
        return True
    return (account_type or "").upper() == "ROOT" and name == TEMPLATE_ROOT_NAME


__all__ = [
    "TEMPLATE_NAMESPACE",
    "TEMPLATE_ROOT_NAME",
    "is_template_namespace",
    "is_template_account",
]
