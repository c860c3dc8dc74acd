import json
from sqlalchemy.types import Text, TypeDecorator


class JSONText(TypeDecorator):
    """Stores a dict/list document as serialized JSON in a TEXT column.

    Values are only persisted when the attribute is reassigned; in-place
    mutation of a loaded document is not tracked.
    """

    impl = Text
    cache_ok = True

    def __init__(self, empty=dict, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.empty = empty

    def process_bind_param(self, value, dialect):
        if value is None:
            value = self.empty()
        return json.dumps(value, default=str)

    def process_result_value(self, value, dialect):
        if not value:
            return self.empty()
        return json.loads(value)
