class RecordMixin:
    """Column-for-column dict view of a model row, used as the store's record shape."""

    def to_dict(self):
        return {c.name: getattr(self, c.name) for c in self.__table__.columns}
