"""
Identification system for priority tree nodes.

Provides stable identifiers for tree nodes that do not depend on objects in
memory, so selection state survives a full rebuild of the layout.

Identifiers are hierarchical, built from the identifiers of the node and its
ancestors:
- category:work - category "work"
- group:work/reports - group "reports" inside "work"
- item:work/reports/q3 - item "q3" inside "work/reports"
- placeholder:group:work/reports - "no items" slice of an empty group
- placeholder:category:home - "no groups" slice of an empty category

Node identifiers are escaped before joining ("%" becomes "%25", "/" becomes
"%2F"), so two different nodes never share a key.
"""

PATH_SEPARATOR = "/"


def escape_segment(node_id: str) -> str:
    """Escapes a node identifier for use as one path segment of a key."""
    return node_id.replace("%", "%25").replace(PATH_SEPARATOR, "%2F")


class NodeIdentity:
    """Class for working with tree node identifiers."""

    @staticmethod
    def _join(*node_ids: str) -> str:
        return PATH_SEPARATOR.join(escape_segment(node_id) for node_id in node_ids)

    @staticmethod
    def generate_category_id(category_id: str) -> str:
        """Generates ID for category node."""
        return f"category:{NodeIdentity._join(category_id)}"

    @staticmethod
    def generate_group_id(category_id: str, group_id: str) -> str:
        """Generates ID for group node."""
        return f"group:{NodeIdentity._join(category_id, group_id)}"

    @staticmethod
    def generate_item_id(category_id: str, group_id: str, item_id: str) -> str:
        """Generates ID for item node."""
        return f"item:{NodeIdentity._join(category_id, group_id, item_id)}"

    @staticmethod
    def generate_placeholder_id(owner_id: str) -> str:
        """Generates ID for the placeholder slice of an empty group or category."""
        return f"placeholder:{owner_id}"
