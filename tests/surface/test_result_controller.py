from gemfloat.pipeline.decoder import DecodedResult
from gemfloat.surface.controller import ResultSurfaceController, SurfaceState
from gemfloat.surface.memory import MemoryHost

META = "Finish Reason: STOP | Model Version: m\nUsage: Prompt tokens: 1, Candidate tokens: 2, Total tokens: 3"


def _displaying(text: str = "alpha\nbeta") -> tuple[MemoryHost, ResultSurfaceController]:
    host = MemoryHost(size=(200, 60))
    controller = ResultSurfaceController(host)
    controller.open()
    assert controller.complete(DecodedResult(response_text=text, meta=META))
    return host, controller


def test_open_creates_centered_one_line_surface() -> None:
    host = MemoryHost(size=(120, 41))
    controller = ResultSurfaceController(host)

    surface = controller.open()

    assert (surface.geometry.width, surface.geometry.height) == (60, 1)
    assert (surface.geometry.row, surface.geometry.col) == (20, 30)
    assert controller.state is SurfaceState.LOADING


def test_complete_resizes_and_fires_once() -> None:
    host, controller = _displaying()
    geometry = controller.surface.geometry

    assert (geometry.width, geometry.height, geometry.row, geometry.col) == (160, 48, 5, 20)
    assert controller.complete(DecodedResult(response_text="other", meta="")) is False
    assert controller.surface.get_lines() == ["alpha", "beta"]


def test_close_key_destroys_surface() -> None:
    host, controller = _displaying()
    surface = controller.surface

    assert surface.trigger("q") is True

    assert surface.alive is False
    assert controller.state is SurfaceState.CLOSED
    assert surface.trigger("q") is False


def test_close_on_destroyed_surface_is_a_no_op() -> None:
    host, controller = _displaying()
    controller.close()

    controller.close()
    controller.show_meta()
    controller.export()

    assert controller.state is SurfaceState.CLOSED
    assert host.views == []


def test_export_moves_lines_to_new_active_view() -> None:
    host, controller = _displaying("# Heading\n\n- one\n- two")
    surface = controller.surface

    surface.trigger("t")

    assert surface.alive is False
    assert controller.state is SurfaceState.EXPORTED
    assert len(host.views) == 1
    assert host.active_view is host.views[0]
    assert host.views[0].lines == ["# Heading", "- one", "- two"]
    assert host.views[0].content_type == "markdown"


def test_export_includes_shown_meta() -> None:
    host, controller = _displaying("answer")
    controller.show_meta()

    controller.export()

    assert host.views[0].lines == [*META.splitlines(), "", "answer"]


def test_show_meta_prepends_block_each_time() -> None:
    host, controller = _displaying("answer")
    block = [*META.splitlines(), ""]

    controller.surface.trigger("?")
    assert controller.surface.get_lines() == [*block, "answer"]
    assert controller.meta_shown is True

    controller.surface.trigger("?")
    assert controller.surface.get_lines() == [*block, *block, "answer"]
    assert controller.state is SurfaceState.DISPLAYING


def test_actions_are_not_bound_while_loading() -> None:
    host = MemoryHost()
    controller = ResultSurfaceController(host)
    surface = controller.open()

    assert surface.trigger("q") is False
    assert surface.alive is True


def test_complete_splits_response_on_newlines_only() -> None:
    host, controller = _displaying("a\n\nb\x0cc d")

    assert controller.surface.get_lines() == ["a", "b\x0cc d"]


def test_cancel_key_closes_loading_surface() -> None:
    host = MemoryHost()
    controller = ResultSurfaceController(host)
    surface = controller.open()

    assert surface.trigger("escape") is True

    assert surface.alive is False
    assert controller.state is SurfaceState.CLOSED
    assert controller.complete(DecodedResult(response_text="late", meta="")) is False
