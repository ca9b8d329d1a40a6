# camera/camera.py
import math
from core.vector import Vector3

# Pitch limit just under pi/2, away from the poles where the basis degenerates
MAX_PITCH = 1.5
# Zooming closer than this to the look-at point is refused
MIN_ZOOM_DISTANCE = 1e-3

class Camera:
    """
    Orbit camera looking from eye toward center. Keeps an orthonormal
    forward/right/up basis that is recomputed after every move.
    """
    def __init__(self, eye: Vector3, center: Vector3, up: Vector3, fov: float = math.pi / 3.0):
        self.eye = eye
        self.center = center
        self.up = up
        self.fov = fov
        self.forward = Vector3.zero()
        self.right = Vector3.zero()
        self._changed = True
        self.update_basis_vectors()

    def update_basis_vectors(self):
        """Recomputes forward, right and up from eye, center and the up hint."""
        self.forward = (self.center - self.eye).normalize()
        self.right = self.forward.cross(self.up).normalize()
        self.up = self.right.cross(self.forward)
        self._changed = True

    def orbit(self, yaw: float, pitch: float):
        """
        Rotates the eye around the center by the given yaw and pitch deltas
        (radians). The resulting pitch is clamped to +/-1.5.

        The eye must not coincide with the center; if it does the call has no
        effect.
        """
        relative = self.eye - self.center
        radius = relative.length()
        if radius == 0.0:
            return

        current_yaw = math.atan2(relative.z, relative.x)
        current_pitch = math.asin(max(-1.0, min(relative.y / radius, 1.0)))

        new_yaw = current_yaw + yaw
        new_pitch = max(-MAX_PITCH, min(current_pitch + pitch, MAX_PITCH))

        cos_pitch = math.cos(new_pitch)
        self.eye = self.center + Vector3(
            radius * cos_pitch * math.cos(new_yaw),
            radius * math.sin(new_pitch),
            radius * cos_pitch * math.sin(new_yaw),
        )
        self.update_basis_vectors()

    def pitch(self) -> float:
        relative = self.eye - self.center
        radius = relative.length()
        if radius == 0.0:
            return 0.0
        return math.asin(max(-1.0, min(relative.y / radius, 1.0)))

    def zoom(self, amount: float):
        """Moves the eye along the view direction; positive moves closer."""
        forward = (self.center - self.eye).normalize()
        new_eye = self.eye + forward * amount
        if (self.center - new_eye).length() < MIN_ZOOM_DISTANCE:
            return
        self.eye = new_eye
        self.update_basis_vectors()

    def zoom_in(self, speed: float):
        self.zoom(speed)

    def zoom_out(self, speed: float):
        self.zoom(-speed)

    def is_changed(self) -> bool:
        """Returns whether the camera moved since the last call and resets the flag."""
        changed = self._changed
        self._changed = False
        return changed

    def basis_change(self, v: Vector3) -> Vector3:
        """
        Camera space to world space. Camera space has x to the right, y up and
        z pointing backward, so the camera looks down -z.
        """
        return Vector3(
            v.x * self.right.x + v.y * self.up.x - v.z * self.forward.x,
            v.x * self.right.y + v.y * self.up.y - v.z * self.forward.y,
            v.x * self.right.z + v.y * self.up.z - v.z * self.forward.z,
        )

    def ray_direction(self, x: float, y: float, width: int, height: int) -> Vector3:
        """World-space direction of the primary ray through pixel (x, y)."""
        aspect_ratio = width / height
        perspective_scale = math.tan(self.fov * 0.5)

        screen_x = ((2.0 * x) / width - 1.0) * aspect_ratio * perspective_scale
        screen_y = (-(2.0 * y) / height + 1.0) * perspective_scale

        direction = Vector3(screen_x, screen_y, -1.0).normalize()
        return self.basis_change(direction)
