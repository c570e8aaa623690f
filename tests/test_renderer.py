import io
import numpy as np
from electrofield.renderer import BufferedRenderer, DebugRenderer, NullRenderer
from electrofield.simulation import Simulation


def make_sim():
    sim = Simulation(tracer_density=4)
    sim.add_static_charge(0.0, 0.0, +1)
    sim.add_dynamic_body("point", 1.0, 0.0)
    sim.add_dynamic_body("dipole", -1.0, -1.0)
    return sim


def test_buffered_renderer_accumulates_polylines():
    sim = make_sim()
    renderer = BufferedRenderer()
    for _ in range(3):
        renderer.render_snapshot(sim.step_frame())

    assert len(renderer.frames) == 3
    assert [b["kind"] for b in renderer.frames[-1]["bodies"]] == ["point", "dipole"]
    assert sorted(renderer.polylines) == [0, 1, 2, 3]
    # 30 micro-steps, shared joints counted once
    assert all(len(line) == 31 for line in renderer.polylines.values())
    assert np.allclose(renderer.polylines[0][-1], sim.state.tracers[0].position)

    renderer.clear()
    assert renderer.frames == [] and renderer.polylines == {}


def test_debug_renderer_output():
    out = io.StringIO()
    DebugRenderer(output=out).render_snapshot(make_sim().step_frame())
    text = out.getvalue()
    assert text.startswith("=== Frame t=0.0333 ===")
    assert "~ tracer 0: 10 segments" in text
    assert "[1] point @" in text
    assert "[2] dipole @" in text


def test_null_renderer():
    NullRenderer().render_snapshot(make_sim().step_frame())
