# renderer/raytracer.py
from typing import Optional, Sequence, Tuple
from core.utils import reflect, refract
from core.vector import Vector3
from geometry.cube import Cube
from geometry.hittable import Intersect
from geometry.world import World, nearest_intersection
from materials.textures import TextureManager
from renderer.framebuffer import Framebuffer
from renderer.light import Light
from renderer.tone_mapping import vector3_to_color

# Ray origins are pushed this far off the surface to avoid self-intersection
ORIGIN_BIAS = 1e-4
# Deepest recursion level that still shades a hit
MAX_DEPTH = 3

# Sub-pixel offsets for the jittered LOD; LOD 2 uses JITTER_PATTERN[2 % 4]
JITTER_PATTERN = ((0, 0), (1, 0), (0, 1), (1, 1))
# Alpha of the temporal blend at LOD 2
TEMPORAL_BLEND_ALPHA = 0.7

def offset_origin(intersect: Intersect, direction: Vector3) -> Vector3:
    """Moves the hit point off the surface, to the side the new ray travels into."""
    offset = intersect.normal * ORIGIN_BIAS
    if direction.dot(intersect.normal) < 0.0:
        return intersect.point - offset
    return intersect.point + offset

def refraction_direction(incident: Vector3, normal: Vector3, refractive_index: float) -> Vector3:
    """Refracted direction, or the mirror direction on total internal reflection."""
    refracted = refract(incident, normal, refractive_index)
    if refracted is None:
        return reflect(incident, normal).normalize()
    return refracted

def cast_shadow(intersect: Intersect, light: Light, objects: Sequence[Cube]) -> float:
    """1.0 if any object blocks the segment from the hit point to the light, else 0.0."""
    to_light = light.position - intersect.point
    light_dir = to_light.normalize()
    light_distance = to_light.length()

    shadow_origin = offset_origin(intersect, light_dir)
    for obj in objects:
        shadow_intersect = obj.ray_intersect(shadow_origin, light_dir)
        if shadow_intersect.is_intersecting and shadow_intersect.t < light_distance:
            return 1.0
    return 0.0

def _perturbed_normal(intersect: Intersect, textures: Optional[TextureManager]) -> Vector3:
    normal = intersect.normal
    normal_map_id = intersect.material.normal_map_id
    if normal_map_id is None:
        return normal
    if textures is None:
        raise KeyError(f"Texture '{normal_map_id}' is not loaded")

    tx, ty = textures.texel_coords(normal_map_id, intersect.u, intersect.v)
    tex_normal = textures.get_normal_from_map(normal_map_id, tx, ty)
    if tex_normal is None:
        return normal

    # Cheap tangent frame; degenerates when the normal is along z
    tangent = Vector3(normal.y, -normal.x, 0.0).normalize()
    bitangent = normal.cross(tangent)
    return (tangent * tex_normal.x + bitangent * tex_normal.y + normal * tex_normal.z).normalize()

def _diffuse_color(intersect: Intersect, textures: Optional[TextureManager]) -> Vector3:
    texture_id = intersect.material.texture_id
    if texture_id is None:
        return intersect.material.diffuse
    if textures is None:
        raise KeyError(f"Texture '{texture_id}' is not loaded")
    tx, ty = textures.texel_coords(texture_id, intersect.u, intersect.v)
    return textures.get_pixel_color(texture_id, tx, ty)

def cast_ray(origin: Vector3, direction: Vector3, objects: Sequence[Cube], light: Light,
             sky, depth: int = 0, textures: Optional[TextureManager] = None) -> Vector3:
    """
    Color seen along a ray.

    Shades the nearest hit with Phong lighting and a hard shadow, then adds
    mirror reflection and refraction by recursing one level deeper. Beyond
    MAX_DEPTH, and on a miss, the sky color is returned.

    The final mix phong * (1 - kr - kt) + reflected * kr + refracted * kt is
    not renormalized, so materials with kr + kt > 1 can come out over-bright
    or negative.
    """
    if depth > MAX_DEPTH:
        return sky.get_color(direction)

    intersect = nearest_intersection(objects, origin, direction)
    if not intersect.is_intersecting:
        return sky.get_color(direction)

    material = intersect.material
    light_dir = (light.position - intersect.point).normalize()
    view_dir = (origin - intersect.point).normalize()

    normal = _perturbed_normal(intersect, textures)
    light_reflect_dir = reflect(-light_dir, normal).normalize()

    shadow_intensity = cast_shadow(intersect, light, objects)
    light_intensity = light.intensity * (1.0 - shadow_intensity)

    diffuse_intensity = max(normal.dot(light_dir), 0.0) * light_intensity
    diffuse = _diffuse_color(intersect, textures) * diffuse_intensity

    specular_intensity = max(view_dir.dot(light_reflect_dir), 0.0) ** material.specular * light_intensity
    specular = light.color * specular_intensity

    albedo = material.albedo
    phong_color = diffuse * albedo[0] + specular * albedo[1]

    reflectivity = material.reflectivity
    if reflectivity > 0.0:
        reflect_dir = reflect(direction, normal).normalize()
        reflect_origin = offset_origin(intersect, reflect_dir)
        reflect_color = cast_ray(reflect_origin, reflect_dir, objects, light, sky, depth + 1, textures)
    else:
        reflect_color = Vector3.zero()

    transparency = material.transparency
    if transparency > 0.0:
        refract_dir = refraction_direction(direction, normal, material.refractive_index)
        refract_origin = offset_origin(intersect, refract_dir)
        refract_color = cast_ray(refract_origin, refract_dir, objects, light, sky, depth + 1, textures)
    else:
        refract_color = Vector3.zero()

    return (phong_color * (1.0 - reflectivity - transparency)
            + reflect_color * reflectivity
            + refract_color * transparency)

def lod_step_size(lod_level: int) -> int:
    """Pixel stride of an adaptive pass."""
    if lod_level <= 2:
        return 1
    if lod_level == 3:
        return 2
    if lod_level == 4:
        return 3
    return 4

def lod_block_size(lod_level: int) -> int:
    """Edge of the block each sample is splatted into (LOD 3 and coarser)."""
    if lod_level == 3:
        return 2
    if lod_level == 4:
        return 3
    return 4

class Renderer:
    """
    Runs render passes of a world into a framebuffer. Every pass traces one
    primary ray per visited pixel through cast_ray.
    """
    def __init__(self, framebuffer: Framebuffer, textures: Optional[TextureManager] = None):
        self.framebuffer = framebuffer
        self.textures = textures

    @property
    def width(self) -> int:
        return self.framebuffer.width

    @property
    def height(self) -> int:
        return self.framebuffer.height

    def trace_pixel(self, world: World, camera, x: int, y: int) -> Vector3:
        direction = camera.ray_direction(x, y, self.width, self.height)
        return cast_ray(camera.eye, direction, world.objects, world.light, world.sky, 0, self.textures)

    def shade_pixel(self, world: World, camera, x: int, y: int) -> Tuple[int, int, int]:
        return vector3_to_color(self.trace_pixel(world, camera, x, y))

    def render(self, world: World, camera):
        """Full-resolution pass: clears, then shades every pixel."""
        fb = self.framebuffer
        fb.clear()
        for y in range(fb.height):
            for x in range(fb.width):
                fb.set_pixel(x, y, self.shade_pixel(world, camera, x, y))

    def render_adaptive(self, world: World, camera, lod_level: int, clear: Optional[bool] = None):
        """
        Level-of-detail pass. LOD 1 shades every pixel, LOD 2 shades every
        pixel at a jittered position and blends it over the previous frame,
        LOD 3+ shades a sparse grid and splats each sample into a block.

        By default the buffer is cleared only for LOD 4 and coarser.
        """
        fb = self.framebuffer
        if clear is None:
            clear = lod_level >= 4
        if clear:
            fb.clear()

        step = lod_step_size(lod_level)
        jitter = JITTER_PATTERN[lod_level % 4] if lod_level == 2 else None

        for y in range(0, fb.height, step):
            for x in range(0, fb.width, step):
                if jitter is not None:
                    actual_x = min(x + jitter[0], fb.width - 1)
                    actual_y = min(y + jitter[1], fb.height - 1)
                else:
                    actual_x, actual_y = x, y

                color = self.shade_pixel(world, camera, actual_x, actual_y)

                if lod_level == 1:
                    fb.set_pixel(actual_x, actual_y, color)
                elif lod_level == 2:
                    fb.blend_pixel(actual_x, actual_y, color, TEMPORAL_BLEND_ALPHA)
                else:
                    fb.fill_block(x, y, color, lod_block_size(lod_level))

    def render_progressive(self, world: World, camera, samples_per_frame: int,
                           current_sample: int) -> Tuple[int, bool]:
        """
        Shades the next samples_per_frame pixels in raster order starting at
        current_sample. The first chunk of a refinement clears the buffer.
        Returns the advanced cursor and whether the frame is complete.
        """
        fb = self.framebuffer
        if current_sample == 0:
            fb.clear()
        total_pixels = fb.pixel_count
        start_pixel = current_sample
        end_pixel = min(start_pixel + samples_per_frame, total_pixels)

        for pixel_index in range(start_pixel, end_pixel):
            x = pixel_index % fb.width
            y = pixel_index // fb.width
            fb.set_pixel(x, y, self.shade_pixel(world, camera, x, y))

        return end_pixel, end_pixel >= total_pixels
