"""
Tests for the shared document store.
"""

import pytest

from folio_layout.core.models import Item, ItemKind
from folio_layout.layout import LayoutConfig, LayoutMode
from folio_layout.store import DocumentStore, InMemoryRepository, ItemNotFoundError


@pytest.fixture
def repository(item_factory):
    return InMemoryRepository([
        item_factory(item_id="a", width=300, height=100, page=1, x=200, y=300),
        item_factory(item_id="b", width=300, height=100, page=1, x=50, y=50),
        item_factory(item_id="c", width=100, height=100, page=2, x=400, y=400),
        item_factory(item_id="s", width=80, height=40, page=2, kind=ItemKind.SHAPE),
    ])


@pytest.fixture
def store(qtbot, repository):
    return DocumentStore(repository=repository, config=LayoutConfig())


class TestReadModel:

    def test_init_loads_repository(self, store):
        assert [i.id for i in store.items] == ["a", "b", "c", "s"]
        assert store.layout_mode is LayoutMode.INSERTION

    def test_get_when_unknown_then_raises_not_found(self, store):
        with pytest.raises(ItemNotFoundError):
            store.get("missing")

    def test_items_on_page_filters_by_page(self, store):
        assert [i.id for i in store.items_on_page(2)] == ["c", "s"]

    def test_visible_count_ignores_items_outside_page(self, store):
        store.move_item("a", 700, 10)

        assert store.visible_count(1, 600, 849) == 1

    def test_collisions_reports_overlapping_items(self, store):
        store.move_item("c", 0, 0)

        assert [i.id for i in store.collisions("s")] == ["c"]


class TestAutoLayout:

    def test_auto_layout_page_persists_and_cycles_mode(self, store, repository):
        # Act
        result = store.auto_layout_page(1, 600, 849)

        # Assert
        assert result.mode is LayoutMode.INSERTION
        assert store.layout_mode is LayoutMode.HEIGHT_DESC
        assert repository.save_count == 1
        assert [(i.x, i.y) for i in store.items[:2]] == [(10, 10), (10, 115)]
        assert repository.load_all() == list(store.items)

    def test_auto_layout_page_when_empty_page_then_still_persists_and_cycles(self, qtbot, item_factory):
        repository = InMemoryRepository([item_factory(page=1)])
        store = DocumentStore(repository=repository)

        with qtbot.waitSignal(store.itemsChanged):
            result = store.auto_layout_page(3)

        assert result.pages[0].considered == 0
        assert repository.save_count == 1
        assert store.layout_mode is LayoutMode.HEIGHT_DESC

    def test_auto_layout_page_when_invalid_page_then_raises_error(self, store):
        with pytest.raises(ValueError):
            store.auto_layout_page(4)

    def test_auto_layout_page_uses_active_mode(self, store):
        store.cycle_layout_mode()
        store.cycle_layout_mode()

        result = store.auto_layout_page(2)

        assert result.mode is LayoutMode.WIDTH_DESC
        assert store.layout_mode is LayoutMode.INSERTION

    def test_auto_layout_all_pages_persists_once(self, store, repository):
        result = store.auto_layout_all_pages(600, 849)

        assert repository.save_count == 1
        assert [p.page for p in result.pages] == [1, 2, 3]
        assert store.get("c").x == 10
        assert store.last_result is result

    def test_cycle_layout_mode_emits_new_mode(self, store, qtbot):
        with qtbot.waitSignal(store.layoutModeChanged) as blocker:
            store.cycle_layout_mode()

        assert blocker.args == ["height_desc"]

    def test_snapshot_is_not_mutated_by_later_layout(self, store):
        before = store.items

        store.auto_layout_all_pages()

        assert before[0].x == 200
        assert store.items is not before


class TestManualEdits:

    def test_drag_item_when_dropped_past_page_then_retargeted(self, store):
        # Page spacing 849 + 50 = 899
        moved = store.drag_item("a", 40, 910)

        assert (moved.page, moved.y, moved.x) == (2, 11, 40)
        assert store.get("a") == moved

    def test_move_item_keeps_page(self, store):
        moved = store.move_item("c", 5, 6)

        assert (moved.page, moved.x, moved.y) == (2, 5, 6)

    def test_toggle_border_flips_flag(self, store):
        assert store.toggle_border("a").has_border
        assert not store.toggle_border("a").has_border

    def test_toggle_percentage_adds_badge(self, store):
        assert store.toggle_percentage("b", 15).percentages == (15,)

    def test_set_text_when_image_then_raises_error(self, store):
        with pytest.raises(ValueError, match="Only shapes"):
            store.set_text("a", "hello")

    def test_set_text_when_shape_then_updated(self, store):
        assert store.set_text("s", "Sale").text == "Sale"

    def test_add_item_when_duplicate_id_then_raises_error(self, store, item_factory):
        with pytest.raises(ValueError, match="Duplicate item id"):
            store.add_item(item_factory(item_id="a"))

    def test_add_item_when_page_out_of_range_then_raises_error(self, store, item_factory):
        with pytest.raises(ValueError):
            store.add_item(item_factory(page=5))

    def test_insert_on_page_copies_with_fresh_id(self, store):
        copy = store.insert_on_page(store.get("c"), 3)

        assert copy.id == "c-1"
        assert (copy.page, copy.x, copy.y) == (3, 10, 10)
        assert store.get("c").page == 2

    def test_delete_item_clears_selection(self, store, qtbot):
        store.select_item("b")

        with qtbot.waitSignal(store.selectionChanged):
            store.delete_item("b")

        assert store.find("b") is None
        assert store.selected_id is None

    def test_delete_item_when_unknown_then_raises_not_found(self, store):
        with pytest.raises(ItemNotFoundError):
            store.delete_item("zzz")

    def test_clear_shapes_keeps_images(self, store):
        removed = store.clear_shapes()

        assert removed == 1
        assert [i.id for i in store.items] == ["a", "b", "c"]

    def test_clear_everything_empties_document(self, store, repository):
        store.clear_everything()

        assert store.items == ()
        assert repository.load_all() == []

    def test_reload_replaces_document(self, store):
        seed = [Item(id="seed", x=0, y=0, width=10, height=10)]

        store.reload(seed)

        assert [i.id for i in store.items] == ["seed"]

    def test_every_mutation_emits_items_changed(self, store):
        emitted = []
        store.itemsChanged.connect(lambda: emitted.append(True))

        store.move_item("a", 1, 1)
        store.toggle_border("a")
        store.drag_item("a", 1, 1)

        assert len(emitted) == 3


class TestReconfigure:

    def test_reconfigure_does_not_move_items(self, store):
        before = store.items

        store.reconfigure(LayoutConfig(page_width=400, total_pages=4))

        assert store.items is before
        assert store.config.page_height == 566

    def test_reconfigure_when_pages_in_use_removed_then_raises_error(self, store):
        with pytest.raises(ValueError, match="still has items"):
            store.reconfigure(LayoutConfig(total_pages=1))


class TestConstruction:

    def test_init_when_item_beyond_total_pages_then_raises_error(self, qtbot, item_factory):
        repository = InMemoryRepository([item_factory(page=3)])

        with pytest.raises(ValueError, match="page 3 still has items"):
            DocumentStore(repository=repository, config=LayoutConfig(total_pages=2))

    def test_init_when_items_given_then_used_instead_of_repository(self, qtbot, item_factory):
        repository = InMemoryRepository([item_factory(item_id="stored")])
        given = [item_factory(item_id="given")]

        store = DocumentStore(repository=repository, items=given)

        assert [i.id for i in store.items] == ["given"]
        assert repository.save_count == 0
