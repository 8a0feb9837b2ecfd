"""Unit tests for comment tree construction."""

from tests.conftest import comment_thing, more_thing
from urlsum.domain.model import Comment, MoreItem
from urlsum.domain.service import CommentForest, process_comment_batch, walk_listing
from urlsum.domain.value import CommentId


def make_comment(
    comment_id: str, parent_id: str | None = None, depth: int = 0, body: str = "text"
) -> Comment:
    return Comment(
        id=CommentId(comment_id), parent_id=parent_id, body=body, author="a", depth=depth
    )


class TestProcessCommentBatch:
    """Tests for process_comment_batch."""

    def test_nested_replies_get_increasing_depth(self):
        """Should assign depth by nesting and keep pre-order."""
        children = [
            comment_thing(
                "c1",
                parent_id="t3_abc123",
                replies=[
                    comment_thing(
                        "c2",
                        parent_id="t1_c1",
                        replies=[comment_thing("c3", parent_id="t1_c2")],
                    )
                ],
            ),
            comment_thing("c4", parent_id="t3_abc123"),
        ]

        batch = process_comment_batch(children, depth=0)

        assert [c.id for c in batch.comments] == ["c1", "c2", "c3", "c4"]
        assert [c.depth for c in batch.comments] == [0, 1, 2, 0]
        assert batch.count == 4
        assert batch.more_items == []

    def test_more_placeholder_becomes_more_item(self):
        """Should turn placeholders with ids into MoreItems at their depth."""
        children = [
            comment_thing(
                "c1",
                replies=[more_thing(["x1", "x2"], parent_id="t1_c1")],
            ),
            more_thing(["y1"]),
        ]

        batch = process_comment_batch(children, depth=0)

        assert batch.more_items == [
            MoreItem(ids=("x1", "x2"), depth=1),
            MoreItem(ids=("y1",), depth=0),
        ]
        assert batch.count == 1

    def test_more_placeholder_without_ids_ignored(self):
        """Should drop 'continue this thread' placeholders with no ids."""
        batch = process_comment_batch([more_thing([])], depth=0)

        assert batch.more_items == []

    def test_empty_string_replies(self):
        """Should treat Reddit's empty-string replies as no replies."""
        batch = process_comment_batch([comment_thing("c1")], depth=0)

        assert len(batch.comments) == 1
        assert batch.more_items == []

    def test_missing_parent_filled_from_argument(self):
        batch = process_comment_batch([comment_thing("c2")], depth=1, parent_id="t1_c1")

        assert batch.comments[0].parent_id == "t1_c1"

    def test_content_text_used_when_body_missing(self):
        thing = {"kind": "t1", "data": {"id": "c1", "contentText": "fallback"}}

        batch = process_comment_batch([thing], depth=0)

        assert batch.comments[0].body == "fallback"

    def test_comment_without_text_kept_with_empty_body(self):
        """Should still count a t1 that carries neither body nor contentText."""
        thing = {"kind": "t1", "data": {"id": "c1", "author": "a", "score": 3}}

        batch = process_comment_batch([thing, comment_thing("c2")], depth=0)

        assert [c.id for c in batch.comments] == ["c1", "c2"]
        assert batch.comments[0].body == ""
        assert batch.count == 2

    def test_missing_id_gets_generated_one(self):
        thing = {"kind": "t1", "data": {"body": "anonymous"}}

        batch = process_comment_batch([thing], depth=0)

        assert batch.comments[0].id.startswith("anon_")

    def test_unknown_kinds_ignored(self):
        children = [
            {"kind": "t3", "data": {"id": "p"}},
            {"kind": "t1"},
            "garbage",
            comment_thing("c1"),
        ]

        batch = process_comment_batch(children, depth=0)

        assert [c.id for c in batch.comments] == ["c1"]

    def test_walk_listing_collects_all_placeholders(self):
        children = [
            comment_thing("c1", replies=[more_thing(["a"], parent_id="t1_c1")]),
            more_thing(["b", "c"]),
        ]

        batch = walk_listing(children)

        assert [c.id for c in batch.comments] == ["c1"]
        assert [m.ids for m in batch.more_items] == [("a",), ("b", "c")]

    def test_walk_listing_reaches_deep_placeholders(self):
        children = [
            comment_thing(
                "c1",
                replies=[
                    comment_thing("c2", replies=[more_thing(["deep"], parent_id="t1_c2")])
                ],
            ),
        ]

        batch = walk_listing(children)

        assert [c.id for c in batch.comments] == ["c1", "c2"]
        assert batch.more_items == [MoreItem(ids=("deep",), depth=2)]


class TestCommentForest:
    """Tests for CommentForest."""

    def test_resolved_comment_attached_under_parent(self):
        """Should insert a late comment directly under its parent."""
        forest = CommentForest()
        forest.extend(
            [
                make_comment("c1", "t3_p"),
                make_comment("c2", "t1_c1", depth=1),
                make_comment("c3", "t3_p"),
            ]
        )

        # Resolved later with the placeholder's depth
        forest.add(make_comment("c4", "t1_c1", depth=0))

        flat = forest.flatten()
        assert [c.id for c in flat] == ["c1", "c2", "c4", "c3"]
        assert [c.depth for c in flat] == [0, 1, 1, 0]

    def test_depth_recomputed_through_chain(self):
        forest = CommentForest()
        forest.add(make_comment("c1", "t3_p"))
        forest.add(make_comment("c2", "t1_c1", depth=5))
        forest.add(make_comment("c3", "t1_c2", depth=0))

        assert [c.depth for c in forest.flatten()] == [0, 1, 2]

    def test_orphan_kept_at_top_level(self):
        """Should keep comments whose parent is unknown, with their own depth."""
        forest = CommentForest()
        forest.add(make_comment("c1", "t3_p"))

        forest.add(make_comment("c9", "t1_missing", depth=3))

        assert [c.id for c in forest.flatten()] == ["c1", "c9"]
        assert forest.flatten()[1].depth == 3

    def test_duplicates_ignored(self):
        forest = CommentForest()

        assert forest.add(make_comment("c1", body="first")) is True
        assert forest.add(make_comment("c1", body="second")) is False
        assert len(forest) == 1
        assert forest.flatten()[0].body == "first"
        assert "c1" in forest
