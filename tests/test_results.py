"""Tests for the result presenter."""

from datetime import UTC, datetime

from progen_studio.domain.generation import ImagePayload
from progen_studio.services.results import ResultPresenter

NOW = datetime(2026, 10, 19, 8, 30, tzinfo=UTC)


def test_export_without_image_is_noop(tmp_path) -> None:
    presenter = ResultPresenter(export_dir=tmp_path, clock=lambda: NOW)

    assert presenter.export() is None
    assert list(tmp_path.iterdir()) == []


def test_export_twice_in_same_instant_uses_distinct_names(tmp_path) -> None:
    presenter = ResultPresenter(export_dir=tmp_path, clock=lambda: NOW)
    presenter.show_image(ImagePayload(data=b"png-bytes"))

    first = presenter.export()
    second = presenter.export()

    assert first != second
    stamp = int(NOW.timestamp() * 1000)
    assert first.name == f"generated-{stamp}.png"
    assert second.name == f"generated-{stamp + 1}.png"
    assert first.read_bytes() == b"png-bytes"
    assert second.read_bytes() == b"png-bytes"


def test_export_skips_existing_files(tmp_path) -> None:
    stamp = int(NOW.timestamp() * 1000)
    (tmp_path / f"generated-{stamp}.png").write_bytes(b"old")
    presenter = ResultPresenter(export_dir=tmp_path, clock=lambda: NOW)
    presenter.show_image(ImagePayload(data=b"new"))

    path = presenter.export()

    assert path.name == f"generated-{stamp + 1}.png"
    assert (tmp_path / f"generated-{stamp}.png").read_bytes() == b"old"


def test_show_image_clears_error_but_clear_drops_all(tmp_path) -> None:
    presenter = ResultPresenter(export_dir=tmp_path)
    presenter.show_error("boom")
    presenter.show_image(ImagePayload(data=b"x"))
    presenter.show_notice("usage not recorded")

    assert presenter.error_message is None

    presenter.clear()

    assert presenter.image is None
    assert presenter.notice is None

