class GraspGenerationError(Exception):
    """ base class for errors raised while generating cuboid grasps """


class DegenerateMeshError(GraspGenerationError):
    """ mesh has no vertices, no centroid or bounding box can be computed """


class InvalidGeometryError(GraspGenerationError, ValueError):
    """ cuboid or gripper parameters are not usable (non-positive etc.) """


class AngularSweepBoundExceeded(RuntimeWarning):
    """ an angular sweep hit its iteration cap before finding a collision """
