"""Splitting of text into fields separated by runs of spaces."""

import re

_FIELD = re.compile(r" *([^ ]*) ?")


class FieldScanner:
    """Reads space-delimited fields from a line, one after another."""

    def __init__(self, text):
        self._text = text
        self._position = 0

    def next(self):
        """Return the next field, or an empty string at the end of the text.

        One space following the field is consumed along with it.
        """
        match = _FIELD.match(self._text, self._position)
        self._position = match.end()
        return match.group(1)

    def next_fields(self, count):
        """Return up to ``count`` further fields, stopping at the first empty one."""
        fields = []
        for _ in range(count):
            field = self.next()
            if not field:
                break
            fields.append(field)
        return fields

    def remaining(self):
        """Return the text not yet consumed."""
        return self._text[self._position:]