"""Task ordering - bubble unfinished checklist items to the top of each list."""

from .document import Container, Document, List, Node, TaskState, is_unfinished_task


def _sort_key(node: Node) -> int:
    # Unfinished first; finished items and plain entries share the second slot.
    return 0 if is_unfinished_task(node) is TaskState.UNFINISHED else 1


def sort_tasks(document: Document) -> None:
    """
    Move unfinished tasks ahead of everything else in every list, in place.

    Nested lists are sorted before the list that contains them. The sort is
    stable, so unfinished items keep their relative order, as do the rest.
    Containers other than lists are walked but never reordered.
    """
    for node in document:
        if not isinstance(node, Container):
            continue

        sort_tasks(node.children)

        if isinstance(node.tag, List):
            node.children.sort(key=_sort_key)
