from lensmatch.models.schema import (
    AddPowerPrescription,
    EyeValues,
    PrescriptionPair,
    SingleVisionPrescription,
)
from lensmatch.services.prescription_entry import (
    has_required_values,
    power_options,
    sync_add_from_nv,
    sync_from_dv,
    sync_nv_from_add,
)


def test_near_vision_mirrors_distance_cylinder_and_axis():
    rx = AddPowerPrescription(dv=EyeValues(sph="-2.00", cyl="-0.75", axis="170"), nv=EyeValues(sph="0.50"))
    synced = sync_from_dv(rx)
    assert (synced.nv.sph, synced.nv.cyl, synced.nv.axis) == ("0.50", "-0.75", "170")
    assert rx.nv.cyl == ""


def test_add_follows_near_sphere():
    rx = AddPowerPrescription(dv=EyeValues(sph="-2.00"), nv=EyeValues(sph="0.50"))
    assert sync_add_from_nv(rx).add == "2.50"


def test_near_sphere_follows_add():
    rx = AddPowerPrescription(dv=EyeValues(sph="-2.00"), add="2.50")
    assert sync_nv_from_add(rx).nv.sph == "0.50"


def test_sync_waits_for_distance_sphere():
    rx = AddPowerPrescription(dv=EyeValues(), nv=EyeValues(sph="1.00"), add="2.00")
    assert sync_add_from_nv(rx) == rx
    assert sync_nv_from_add(rx) == rx


def test_required_values_single_vision():
    assert has_required_values(SingleVisionPrescription(sph="-1.00"))
    assert has_required_values(SingleVisionPrescription(cyl="-0.50"))
    assert not has_required_values(SingleVisionPrescription(axis="90"))


def test_required_values_add_power():
    assert has_required_values(AddPowerPrescription(dv=EyeValues(sph="-1.00"), add="2.00"))
    assert has_required_values(AddPowerPrescription(dv=EyeValues(cyl="-1.00"), add="2.00"))
    assert not has_required_values(AddPowerPrescription(dv=EyeValues(sph="-1.00")))
    assert not has_required_values(AddPowerPrescription(dv=EyeValues(), add="2.00"))


def test_power_options():
    options = power_options()
    assert len(options["sph"]) == 161
    assert len(options["cyl"]) == 49
    assert len(options["axis"]) == 181
    assert len(options["add"]) == 9
    assert options["sph"][0] == {"value": "-20.00", "label": "-20.00"}
    assert {"value": "0.00", "label": "+0.00"} in options["cyl"]
    assert options["add"][0] == {"value": "1.00", "label": "+1.00"}
    assert options["axis"][-1] == {"value": "180", "label": "180°"}


def test_eye_variant_is_picked_from_shape():
    pair = PrescriptionPair.model_validate({
        "right_eye": {"dv": {"sph": "-1.00"}, "add": "2.00"},
        "left_eye": {"sph": "-1.00", "cyl": "", "axis": ""},
    })
    assert isinstance(pair.right_eye, AddPowerPrescription)
    assert isinstance(pair.left_eye, SingleVisionPrescription)
