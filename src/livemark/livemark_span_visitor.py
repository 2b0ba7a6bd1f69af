"""
Visitor base class for rendered spans.
"""

from typing import Any, List

from livemark.livemark_span import Span


class SpanVisitor:
    """
    Base visitor class for span traversal.

    Named spans dispatch to `visit_<name>` (e.g. `visit_Emphasis`), unnamed spans to `visit_<kind>`
    (`visit_mark`, `visit_content`, `visit_empty_line`).  Spans without a handler go to `generic_visit`.
    """

    def visit(self, span: Span) -> Any:
        """
        Visit a span and dispatch to the appropriate visit method.

        Args:
            span: The span to visit

        Returns:
            The result of visiting the span
        """
        method_name = f'visit_{span.name}' if span.name else f'visit_{span.kind.value}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(span)

    def generic_visit(self, span: Span) -> List[Any]:
        """
        Default visit method for spans without specific handlers.

        Args:
            span: The span to visit

        Returns:
            A list of results from visiting each child
        """
        results = []
        for child in span.children:
            results.append(self.visit(child))

        return results
