from dataclasses import dataclass, fields, asdict
import json
import math
from grasplib.errors import InvalidGeometryError


@dataclass(frozen=True)
class GripperGeometry:
    """ Parallel gripper description used to enumerate cuboid grasps.
    All lengths in [m], angles in [rad]. """
    gripper_width: float            # opening width of the fingers across a face
    finger_to_palm_depth: float     # distance from palm to fingertip
    grasp_min_depth: float          # minimum usable grasp depth
    angle_resolution: float         # [rad] angular sampling step
    grasp_resolution: float         # linear sampling step along a face
    grasp_depth_resolution: float   # sampling step along the approach direction

    @property
    def finger_depth(self):
        """ usable finger length """
        return self.finger_to_palm_depth - self.grasp_min_depth

    def validate(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not (isinstance(value, (int, float)) and math.isfinite(value) and value > 0):
                raise InvalidGeometryError(
                    f"Gripper {f.name} must be a positive number, got {value!r}")
        if self.grasp_min_depth > self.finger_to_palm_depth:
            raise InvalidGeometryError(
                f"grasp_min_depth ({self.grasp_min_depth}) exceeds "
                f"finger_to_palm_depth ({self.finger_to_palm_depth})")
        return self

    @classmethod
    def from_dict(cls, config):
        config = dict(config)
        if 'angle_resolution_deg' in config:
            if 'angle_resolution' in config:
                raise InvalidGeometryError(
                    "Give either angle_resolution or angle_resolution_deg, not both")
            config['angle_resolution'] = math.radians(
                config.pop('angle_resolution_deg'))

        names = {f.name for f in fields(cls)}
        unknown = set(config.keys()) - names
        if unknown:
            raise InvalidGeometryError(
                f"Unknown gripper parameters: {sorted(unknown)}")
        missing = names - set(config.keys())
        if missing:
            raise InvalidGeometryError(
                f"Missing gripper parameters: {sorted(missing)}")

        return cls(**{k: float(v) for k, v in config.items()}).validate()

    @classmethod
    def from_json(cls, path):
        with open(path) as F:
            return cls.from_dict(json.load(F))

    def to_dict(self):
        return asdict(self)


# finger depth roughly from the OnRobot RG2 datasheet
RG2_GEOMETRY = GripperGeometry(
    gripper_width=0.02,
    finger_to_palm_depth=0.045,
    grasp_min_depth=0.01,
    angle_resolution=math.radians(15),
    grasp_resolution=0.01,
    grasp_depth_resolution=0.01,
)
