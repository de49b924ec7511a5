"""Tests for region discovery and instance construction."""

from __future__ import annotations

import logging

import numpy as np

from network_tiles.host.page import POINTER_ENTER, POINTER_LEAVE, Page, Tile
from network_tiles.lifecycle.factory import InstanceFactory
from network_tiles.simulation.scheduler import FrameScheduler


class _NoContextSurface:
    def resize(self, width, height, pixel_ratio=1.0):
        pass

    def get_context(self, kind="2d"):
        return None


def _make_page(n: int = 3, hidden: int = 0, **kwargs) -> Page:
    tiles = [Tile(f"T{i}", 120, 80) for i in range(n)]
    for tile in tiles[n - hidden:]:
        tile.hidden = True
    return Page(tiles, **kwargs)


def _make_factory(page: Page) -> tuple[InstanceFactory, FrameScheduler]:
    scheduler = FrameScheduler()
    return InstanceFactory(page, scheduler, rng=np.random.default_rng(0)), scheduler


class TestDiscover:
    def test_visible_marked_regions_only(self):
        page = _make_page(4, hidden=1)
        page.add(Tile("Header", classes=("table_type_header",)))
        factory, _ = _make_factory(page)
        assert [r.title for r in factory.discover()] == ["T0", "T1", "T2"]

    def test_restartable(self):
        page = _make_page(3)
        factory, _ = _make_factory(page)
        assert list(factory.discover()) == list(factory.discover())
        page.add(Tile("T3"))
        assert len(list(factory.discover())) == 4


class TestInitialize:
    def test_one_instance_per_region(self):
        page = _make_page(3)
        factory, _ = _make_factory(page)
        created = factory.initialize_visible()
        assert len(created) == 3
        assert factory.initialize_visible() == []
        assert set(factory.instances) == set(page.regions)

    def test_initialize_region_returns_existing(self):
        page = _make_page(1)
        factory, _ = _make_factory(page)
        first = factory.initialize_region(page.regions[0])
        assert factory.initialize_region(page.regions[0]) is first

    def test_pixel_ratio_from_page(self):
        page = _make_page(1, device_pixel_ratio=2.0)
        factory, _ = _make_factory(page)
        (instance,) = factory.initialize_visible()
        assert instance.surface.width == 240

    def test_skips_region_without_canvas(self, caplog):
        page = _make_page(2)
        page.regions.insert(1, Tile("Bare", with_canvas=False))
        factory, _ = _make_factory(page)
        with caplog.at_level(logging.ERROR):
            created = factory.initialize_visible()
        assert len(created) == 2
        assert "Canvas not found for tile with title 'Bare'." in caplog.text
        assert page.regions[1] not in factory.instances

    def test_skips_region_without_context(self, caplog):
        page = _make_page(2)
        page.regions[0].canvas = _NoContextSurface()
        factory, _ = _make_factory(page)
        with caplog.at_level(logging.ERROR):
            created = factory.initialize_visible()
        assert len(created) == 1
        assert "Unable to get canvas context for tile with title 'T0'." in caplog.text

    def test_revealed_regions_initialized(self):
        page = _make_page(5, hidden=3)
        factory, scheduler = _make_factory(page)
        factory.initialize_visible()
        factory.watch_reveals()
        revealed = page.show_more(2)
        assert [r.title for r in revealed] == ["T2", "T3"]
        assert len(factory.instances) == 4
        instance = factory.instances[revealed[0]]
        assert instance.bounds.width == 120.0
        revealed[0].dispatch(POINTER_ENTER)
        scheduler.run(2)
        assert instance.frame_count == 2


class TestIndependentInstances:
    def test_concurrent_hover(self):
        page = _make_page(2)
        factory, scheduler = _make_factory(page)
        factory.initialize_visible()
        a, b = page.regions
        a.dispatch(POINTER_ENTER)
        b.dispatch(POINTER_ENTER)
        scheduler.run(3)
        a.dispatch(POINTER_LEAVE)
        scheduler.run(2)
        instances = factory.instances
        assert instances[a].frame_count == 3
        assert instances[b].frame_count == 5
        assert instances[a].nodes is not instances[b].nodes


class TestRemove:
    def test_page_removal_destroys_instance(self):
        page = _make_page(2)
        factory, scheduler = _make_factory(page)
        factory.initialize_visible()
        a, b = page.regions
        instance = factory.instances[a]
        a.dispatch(POINTER_ENTER)
        page.remove(a)
        assert a not in factory.instances
        assert not instance.is_running
        scheduler.run(3)
        renders = instance.render_count
        page.resize_viewport()
        assert instance.frame_count == 0
        assert instance.render_count == renders
        assert b in factory.instances

    def test_remove_disposes(self):
        page = _make_page(2)
        factory, scheduler = _make_factory(page)
        factory.initialize_visible()
        region = page.regions[0]
        instance = factory.instances[region]
        region.dispatch(POINTER_ENTER)
        factory.remove(region)
        assert region not in factory.instances
        assert not instance.is_running
        region.dispatch(POINTER_ENTER)
        assert scheduler.pending == 0

    def test_dispose_all(self):
        page = _make_page(3, hidden=1)
        factory, _ = _make_factory(page)
        factory.initialize_visible()
        factory.watch_reveals()
        factory.dispose()
        assert factory.instances == {}
        page.show_more()
        assert factory.instances == {}
