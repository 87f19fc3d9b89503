"""Tests for dbent.tag module."""

from dataclasses import dataclass

from dbent import Key, Ok, Tag, Tagged, TaggedMixin, has_tag, tag
from dbent.errors import EntityEmptyError, ManyEmptyError
from dbent.result import Err


@dataclass
class Handmade(TaggedMixin):
    """Keyed and Labeled by hand, Tagged via the mixin."""

    ident: Key[int]
    title: str

    def key(self):
        return Ok(self.ident)

    def label(self):
        return Ok(self.title)


class Broken:
    def __init__(self, key_result, label_result):
        self._key = key_result
        self._label = label_result

    def key(self):
        return self._key

    def label(self):
        return self._label


class TestTag:
    """Test the Tag struct."""

    def test_defaults_are_empty_strings(self):
        assert Tag() == Tag(key="", label="")

    def test_to_dict(self):
        assert Tag(key="1", label="one").to_dict() == {"key": "1", "label": "one"}

    def test_hashable(self):
        assert len({Tag("1", "a"), Tag("1", "a")}) == 1


class TestTagFunction:
    """Test tag() against every key/label combination."""

    def test_present_key(self):
        assert tag(Handmade(Key.new(5), "five")).unwrap() == Tag(key="5", label="five")

    def test_absent_key_renders_none(self):
        assert tag(Handmade(Key(), "draft")).unwrap() == Tag(key="None", label="draft")

    def test_label_rendered_as_text(self):
        record = Broken(Ok(Key.new(1)), Ok(42))
        assert tag(record).unwrap() == Tag(key="1", label="42")

    def test_key_error_wins(self):
        """key() is checked first."""
        record = Broken(Err(EntityEmptyError()), Err(ManyEmptyError()))
        assert tag(record).error == EntityEmptyError()

    def test_label_error(self):
        record = Broken(Ok(Key.new(1)), Err(ManyEmptyError()))
        assert tag(record).error == ManyEmptyError()


class TestHasTag:
    """Test has_tag()."""

    def test_present(self):
        assert has_tag(Handmade(Key.new(5), "five")) is True

    def test_absent_key(self):
        assert has_tag(Handmade(Key(), "draft")) is False

    def test_key_error(self):
        assert has_tag(Broken(Err(EntityEmptyError()), Ok("x"))) is False

    def test_label_error_ignored(self):
        """Only the key decides."""
        assert has_tag(Broken(Ok(Key.new(1)), Err(ManyEmptyError()))) is True


class TestTaggedMixin:
    """Test the blanket implementation as a mixin."""

    def test_methods(self):
        record = Handmade(Key.new(2), "two")
        assert record.tag().unwrap() == Tag(key="2", label="two")
        assert record.has_tag() is True

    def test_protocol(self):
        assert isinstance(Handmade(Key.new(2), "two"), Tagged)
