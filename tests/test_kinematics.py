import pytest

from dsfapi.kinematics import (
    BaseKinematics,
    CoreKinematics,
    DeltaTower,
    KinematicsName,
    ScaraKinematics,
    as_base_kinematics,
    as_core_kinematics,
    as_delta_kinematics,
    as_hangprinter_kinematics,
    as_scara_kinematics,
    as_zleadscrew_kinematics,
    default_anchor_a,
    default_forward_matrix,
    default_inverse_matrix,
    kinematics_name,
)


def test_kinematics_name():
    assert kinematics_name({"name": "coreXY"}) is KinematicsName.CORE_XY
    with pytest.raises(KeyError):
        kinematics_name({})


def test_base_to_dict():
    assert BaseKinematics(name=KinematicsName.CARTESIAN).to_dict() == {"name": "cartesian"}


def test_as_base_kinematics():
    assert as_base_kinematics({"name": "delta", "other": 1}).name is KinematicsName.DELTA


def test_core_keeps_default_matrices():
    core = as_core_kinematics({"name": "cartesian"})
    assert core.forward_matrix == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
    assert core.inverse_matrix == default_inverse_matrix()


def test_core_decodes_matrix_and_tilt():
    matrix = [[1.0, 1.0, 0.0], [1.0, -1.0, 0.0], [0.0, 0.0, 1.0]]
    core = as_core_kinematics(
        {
            "name": "coreXY",
            "forwardMatrix": matrix,
            "tiltCorrection": {"screwX": [10, 20], "screwPitch": 2},
        }
    )
    assert core.forward_matrix == matrix
    assert core.tilt_correction.screw_x == [10.0, 20.0]
    assert core.tilt_correction.screw_pitch == 2.0


def test_core_rejects_other_names():
    with pytest.raises(ValueError, match="Not core kinematics: delta"):
        as_core_kinematics({"name": "delta"})


def test_delta_decodes_towers():
    delta = as_delta_kinematics(
        {"name": "delta", "deltaRadius": 105.6, "towers": [{"diagonal": 215, "xPos": -91.4}]}
    )
    assert delta.delta_radius == 105.6
    assert delta.towers == [DeltaTower(diagonal=215.0, x_pos=-91.4)]


def test_delta_rejects_scara():
    with pytest.raises(ValueError):
        as_delta_kinematics({"name": "Scara"})


def test_hangprinter_defaults():
    hp = as_hangprinter_kinematics({"name": "Hangprinter"})
    assert hp.anchor_a == [0, -2000, -100]
    assert hp.anchor_dz == 3000.0
    assert hp.print_radius == 1500.0


def test_hangprinter_rejects_polar():
    with pytest.raises(ValueError, match="Not Hangprinter kinematics"):
        as_hangprinter_kinematics({"name": "Polar"})


def test_scara_type():
    scara = as_scara_kinematics({"name": "FiveBarScara"})
    assert isinstance(scara, ScaraKinematics)
    assert scara.name is KinematicsName.FIVE_BAR_SCARA


def test_type_mismatch_raises():
    with pytest.raises(ValueError):
        as_delta_kinematics({"name": "delta", "deltaRadius": "wide"})


def test_round_trip_core():
    core = CoreKinematics(name=KinematicsName.CORE_XZ)
    core.tilt_correction.screw_y = [1.0, 2.0]
    data = core.to_dict()
    assert data["name"] == "coreXZ"
    assert as_core_kinematics(data) == core


def test_round_trip_zleadscrew():
    z = as_zleadscrew_kinematics({"name": "Polar", "tiltCorrection": {"maxCorrection": 1}})
    assert as_zleadscrew_kinematics(z.to_dict()) == z


def test_defaults_are_fresh_lists():
    first = default_forward_matrix()
    first[0][0] = 5.0
    assert default_forward_matrix()[0][0] == 1.0
    anchor = default_anchor_a()
    anchor.append(1.0)
    assert len(default_anchor_a()) == 3