"""Property-based tests over random drive sequences."""

import numpy as np
from hypothesis import given, settings, strategies as st

from memristor_sim import ModelKind, create_model, simulate

kinds = st.sampled_from([k.value for k in ModelKind])
drives = st.lists(
    st.floats(min_value=-5.0, max_value=5.0, allow_nan=False, allow_infinity=False),
    min_size=1,
    max_size=60,
)
steps = st.sampled_from([1e-9, 1e-7, 1e-6, 1e-5])


@given(kind=kinds, v=drives, dt=steps)
@settings(max_examples=150, deadline=None)
def test_state_stays_in_domain(kind, v, dt):
    model = create_model(kind)
    lo, hi = model.domain
    for x in v:
        model.advance(x, dt)
        assert lo <= model.state <= hi


@given(kind=kinds, v=drives, dt=steps)
@settings(max_examples=150, deadline=None)
def test_memristance_positive(kind, v, dt):
    model = create_model(kind)
    for x in v:
        model.advance(x, dt)
        assert model.memristance > 0


@given(kind=kinds, v=drives, dt=steps)
@settings(max_examples=60, deadline=None)
def test_simulation_is_deterministic(kind, v, dt):
    a = simulate(create_model(kind), v, dt)
    b = simulate(create_model(kind), v, dt)
    assert np.array_equal(a, b)
    assert len(a) == len(v)


@given(
    w_init=st.floats(min_value=-1.0, max_value=1.0, allow_nan=False),
    kind=st.sampled_from(["linear", "biolek", "joglekar"]),
)
@settings(max_examples=50, deadline=None)
def test_initial_state_clamped(w_init, kind):
    model = create_model(kind, w_init=w_init)
    lo, hi = model.domain
    assert lo <= model.state <= hi
