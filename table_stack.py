import logging

from table_view import TableView

logger = logging.getLogger(__name__)


class TableViewStack:
    """Root view over the whole dataset plus the filtered views derived from it."""

    def __init__(self, root: TableView):
        self._views = [root]

    def __len__(self):
        return len(self._views)

    def __iter__(self):
        return iter(self._views)

    @property
    def active(self) -> TableView:
        return self._views[-1]

    def push(self, view: TableView):
        logger.info("Push view %s (%d rows)", view.name, view.nrows)
        self._views.append(view)
        return view

    def push_filtered(self, parent: TableView, rows) -> TableView:
        view = TableView(f"F[{parent.name}]", rows)
        view.show_index = parent.show_index
        return self.push(view)

    def pop(self):
        """Drop the active view. The root view is never removed."""
        if len(self._views) <= 1:
            return None
        view = self._views.pop()
        logger.info("Pop view %s, active is %s", view.name, self.active.name)
        return view
