"""Tests for model construction through the registry."""

import pytest

from memristor_sim import (
    BiolekParams,
    InvalidModelKind,
    InvalidModelParameters,
    MemristorSimError,
    ModelKind,
    VTEAMParams,
    create_model,
    get_model,
    list_models,
)
from memristor_sim.models.linear import BiolekMemristor

EXPECTED_CLASSES = {
    "linear": "LinearIonDriftMemristor",
    "biolek": "BiolekMemristor",
    "joglekar": "JoglekarMemristor",
    "vteam": "VTEAMMemristor",
    "mms": "MMSMemristor",
    "yakopcic": "YakopcicMemristor",
}


def test_create_every_kind(model_kind):
    model = create_model(model_kind)
    assert type(model).__name__ == EXPECTED_CLASSES[model_kind]
    assert model.kind == ModelKind(model_kind)


def test_kind_is_case_insensitive():
    assert isinstance(create_model(" Biolek "), BiolekMemristor)


def test_enum_kind_accepted():
    assert create_model(ModelKind.VTEAM).kind is ModelKind.VTEAM


def test_fresh_instance_each_call():
    a = create_model("mms")
    b = create_model("mms")
    a.advance(1.0, 1e-5)
    assert a is not b
    assert b.state == 0.0


def test_mapping_params_and_overrides():
    m = create_model("linear", {"R_OFF": 20e3, "R_ON": 10.0}, R_ON=50.0)
    assert m.params.R_OFF == 20e3
    assert m.params.R_ON == 50.0
    assert m.params.mu_v == 1e-9


def test_params_record():
    m = create_model("biolek", BiolekParams(p=2))
    assert m.params.p == 2
    assert m.params.D == 1e-8


def test_params_record_of_wrong_variant():
    with pytest.raises(TypeError):
        create_model("biolek", VTEAMParams())


@pytest.mark.parametrize("kind", ["memcapacitor", "", None, 3])
def test_unknown_kind_is_an_error(kind):
    with pytest.raises(InvalidModelKind) as exc:
        create_model(kind)
    assert isinstance(exc.value, ValueError)
    assert isinstance(exc.value, MemristorSimError)
    assert "linear" in str(exc.value)


def test_unknown_parameter_is_an_error():
    with pytest.raises(InvalidModelParameters) as exc:
        create_model("vteam", R_ON=100.0)
    assert exc.value.unknown == ["R_ON"]
    assert "R_on" in exc.value.allowed


def test_list_models_in_kind_order():
    kinds = [spec.kind for spec in list_models()]
    assert kinds == list(ModelKind)


def test_spec_parameters():
    spec = get_model("vteam")
    assert "k_off" in spec.parameters
    assert "w_init" in spec.parameters
    assert spec.description
