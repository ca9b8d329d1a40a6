# main.py
import argparse
import os
import time
from typing import Optional
import pygame
from core.vector import Vector3
from camera.camera import Camera
from geometry.cube import Cube
from geometry.world import World, SceneRotation
from materials.presets import (MaterialPresets, BALL_TEXTURE, BALL_NORMAL, BRICKS_TEXTURE,
                               BRICKS_NORMAL, GRASS_TEXTURE, GRASS_NORMAL, STONE_TEXTURE,
                               STONE_NORMAL, WATER_TEXTURE, WATER_NORMAL, LAVA_TEXTURE,
                               LAVA_NORMAL)
from materials.texture_loader import save_texture
from materials.textures import (TextureManager, checker_texture, brick_texture, marble_texture,
                                luminance, normal_map_from_height)
from renderer.framebuffer import Framebuffer
from renderer.light import LightPresets
from renderer.raytracer import Renderer
from renderer.scheduler import FrameScheduler, Phase
from renderer.settings import RenderSettings
from renderer.skybox import Skybox, SKYBOX_PRESETS

# Size of procedurally generated textures
GENERATED_TEXTURE_SIZE = 128

# Number key -> (sky preset, light)
ENVIRONMENT_PRESETS = {
    pygame.K_1: ("default", LightPresets.daylight),
    pygame.K_2: ("sunset", LightPresets.sunset_light),
    pygame.K_3: ("night", LightPresets.moonlight),
    pygame.K_4: ("overcast", LightPresets.cool_light),
    pygame.K_5: ("cosmic", LightPresets.warm_light),
}

TEXTURE_GENERATORS = {
    BALL_TEXTURE: lambda size: checker_texture(size, size, Vector3(0.8, 0.2, 0.15), Vector3(0.95, 0.9, 0.85)),
    BRICKS_TEXTURE: lambda size: brick_texture(size, size, Vector3(0.7, 0.25, 0.15), Vector3(0.8, 0.78, 0.72)),
    GRASS_TEXTURE: lambda size: marble_texture(size, size, Vector3(0.35, 0.6, 0.2), Vector3(0.4, 0.3, 0.15),
                                               scale=8.0, turbulence=2.0, seed=1),
    STONE_TEXTURE: lambda size: brick_texture(size, size, Vector3(0.55, 0.55, 0.58), Vector3(0.3, 0.3, 0.3),
                                              rows=4, columns=2),
    WATER_TEXTURE: lambda size: marble_texture(size, size, Vector3(0.3, 0.55, 0.9), Vector3(0.05, 0.2, 0.5),
                                               scale=3.0, turbulence=3.0, seed=2),
    LAVA_TEXTURE: lambda size: marble_texture(size, size, Vector3(1.0, 0.7, 0.1), Vector3(0.5, 0.05, 0.0),
                                              seed=3),
}

# Normal map id -> color texture whose brightness is used as a height field
NORMAL_MAP_SOURCES = {
    BALL_NORMAL: BALL_TEXTURE,
    BRICKS_NORMAL: BRICKS_TEXTURE,
    GRASS_NORMAL: GRASS_TEXTURE,
    STONE_NORMAL: STONE_TEXTURE,
    WATER_NORMAL: WATER_TEXTURE,
    LAVA_NORMAL: LAVA_TEXTURE,
}

def create_world(sky: Skybox) -> World:
    """The floating skyblock scene: a brick platform with cubes hovering above it."""
    print("\n=== Creating World ===")
    world = World(light=LightPresets.daylight(), sky=sky)

    rubber = MaterialPresets.rubber()
    bricks = MaterialPresets.bricks()
    ivory = MaterialPresets.ivory()
    glass = MaterialPresets.glass()

    # Base platform
    for center in [(0.0, -2.0, 0.0), (2.0, -2.0, 0.0), (-2.0, -2.0, 0.0),
                   (0.0, -2.0, 2.0), (0.0, -2.0, -2.0)]:
        world.add(Cube(Vector3(*center), 2.0, bricks))
    print(f"Added brick platform of {len(world)} cubes at y=-2")

    floating = [
        ((3.0, 0.0, 1.0), 1.5, rubber),
        ((-3.0, 1.0, -1.0), 1.2, ivory),
        ((1.0, 2.0, 3.0), 1.0, glass),
        ((-1.5, 3.0, 2.0), 0.8, rubber),
        ((2.5, 1.5, -2.5), 1.3, bricks),
        ((-2.5, 4.0, 0.5), 1.0, ivory),
        ((0.5, 5.0, -1.5), 0.7, glass),
        ((4.0, 2.5, -0.5), 1.1, rubber),
        ((-1.0, 6.0, 1.0), 0.6, bricks),
        ((1.5, 3.5, 2.5), 0.9, ivory),
    ]
    for center, size, material in floating:
        world.add(Cube(Vector3(*center), size, material))
    print(f"Added {len(floating)} floating cubes")
    print(f"World has {len(world)} cubes, light at {world.light.position}")
    return world

def referenced_textures(world: World):
    """Texture and normal map ids used by the cubes of a world, in first-use order."""
    ids = []
    for obj in world.objects:
        for texture_id in (obj.material.texture_id, obj.material.normal_map_id):
            if texture_id is not None and texture_id not in ids:
                ids.append(texture_id)
    return ids

def setup_textures(world: World, texture_dir: Optional[str] = None,
                   size: int = GENERATED_TEXTURE_SIZE) -> TextureManager:
    """
    Registers every texture the world needs. An image named like the id's
    file in texture_dir is loaded if present; anything missing is generated
    (normal maps from the brightness of their color texture) and, when a
    texture_dir was given, written there for later runs.
    """
    textures = TextureManager()
    ids = referenced_textures(world)
    # Color textures first so normal maps can be derived from them
    ids.sort(key=lambda texture_id: texture_id in NORMAL_MAP_SOURCES)

    for texture_id in ids:
        file_name = os.path.basename(texture_id)
        if texture_dir is not None:
            path = os.path.join(texture_dir, file_name)
            if os.path.exists(path):
                textures.load_texture(path, texture_id)
                print(f"Loaded texture {texture_id} from {path}")
                continue

        if texture_id in NORMAL_MAP_SOURCES:
            source_id = NORMAL_MAP_SOURCES[texture_id]
            if source_id in textures:
                source = textures.get_texture(source_id)
            else:
                source = TEXTURE_GENERATORS[source_id](size)
            data = normal_map_from_height(luminance(source))
        else:
            data = TEXTURE_GENERATORS[texture_id](size)
        textures.add_texture(texture_id, data)
        print(f"Generated texture {texture_id}")

        if texture_dir is not None and os.path.isdir(texture_dir):
            save_texture(data, os.path.join(texture_dir, file_name))
    return textures

def orbit_from_keys(camera: Camera, keys, step: float) -> bool:
    """
    Orbits the camera for the held arrow keys: left/right change the yaw by
    +step/-step, up/down change the pitch by -step/+step.
    """
    moved = False
    if keys[pygame.K_LEFT]:
        camera.orbit(step, 0.0)
        moved = True
    if keys[pygame.K_RIGHT]:
        camera.orbit(-step, 0.0)
        moved = True
    if keys[pygame.K_UP]:
        camera.orbit(0.0, -step)
        moved = True
    if keys[pygame.K_DOWN]:
        camera.orbit(0.0, step)
        moved = True
    return moved

class Application:
    def __init__(self, settings: RenderSettings, rotate: bool = False, texture_dir: Optional[str] = None):
        # Initialize Pygame
        pygame.init()
        self.settings = settings
        self.window_width = settings.width
        self.window_height = settings.height
        self.render_width = settings.render_width
        self.render_height = settings.render_height

        # Create window
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Cube Raytracer")
        self.clock = pygame.time.Clock()

        self.camera = Camera(
            eye=Vector3(-5.0, 8.0, 8.0),
            center=Vector3(0.0, 2.0, 0.0),
            up=Vector3(0.0, 1.0, 0.0),
            fov=settings.fov,
        )

        self.world = create_world(Skybox.preset(settings.sky))
        self.scene_pivot = Vector3(0.0, 0.0, 0.0)
        self.rotation = SceneRotation(speed=settings.rotation_speed, active=rotate)

        textures = setup_textures(self.world, texture_dir)
        self.framebuffer = Framebuffer(self.render_width, self.render_height)
        self.renderer = Renderer(self.framebuffer, textures)
        self.scheduler = FrameScheduler(self.renderer, settings.samples_per_frame)

        self.screenshot_count = 0
        self.last_phase = Phase.IDLE

    def handle_input(self) -> bool:
        """
        Applies held keys to the camera. Returns True if the camera moved.
        """
        keys = pygame.key.get_pressed()
        moved = orbit_from_keys(self.camera, keys, self.settings.rotation_speed)

        if keys[pygame.K_w]:
            self.camera.zoom_in(self.settings.zoom_speed)
            moved = True
        if keys[pygame.K_s]:
            self.camera.zoom_out(self.settings.zoom_speed)
            moved = True
        return moved

    def apply_environment_preset(self, key) -> None:
        sky_name, light_factory = ENVIRONMENT_PRESETS[key]
        self.world = self.world.with_environment(light_factory(), Skybox.preset(sky_name))
        print(f"Switched to sky '{sky_name}' with {light_factory.__name__}")

    def save_screenshot(self) -> str:
        self.screenshot_count += 1
        path = f"screenshot_{time.strftime('%Y%m%d_%H%M%S')}_{self.screenshot_count}.png"
        self.framebuffer.save(path)
        print(f"Screenshot saved to {path}")
        return path

    def present(self):
        """Blits the framebuffer to the window if it changed since the last blit."""
        if not self.framebuffer.dirty:
            return
        frame_surface = pygame.surfarray.make_surface(self.framebuffer.buffer)
        if self.render_width != self.window_width or self.render_height != self.window_height:
            frame_surface = pygame.transform.scale(frame_surface, (self.window_width, self.window_height))
        self.screen.blit(frame_surface, (0, 0))
        pygame.display.flip()
        self.framebuffer.dirty = False

    def update_caption(self):
        pygame.display.set_caption(
            f"Cube Raytracer | FPS: {self.clock.get_fps():.1f} | {self.last_phase.value} | "
            f"LOD: {self.scheduler.current_lod}")

    def run(self):
        print("\n=== Initializing Renderer ===")
        print(f"Window: {self.window_width}x{self.window_height}")
        print(f"Render resolution: {self.render_width}x{self.render_height}")
        print(f"Samples per frame: {self.settings.samples_per_frame}")
        print(f"Sky: {self.settings.sky}")
        print("Controls: arrows orbit, W/S zoom, R rotate scene, 1-5 sky presets, P screenshot, Esc quit")

        running = True
        while running:
            self.clock.tick(self.settings.target_fps)
            preset_switched = False

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        active = self.rotation.toggle()
                        print(f"Scene rotation {'on' if active else 'off'}")
                    elif event.key in ENVIRONMENT_PRESETS:
                        self.apply_environment_preset(event.key)
                        preset_switched = True
                    elif event.key == pygame.K_p:
                        self.save_screenshot()

            self.handle_input()
            rotated = self.rotation.advance()
            frame_world = self.rotation.apply(self.world, self.scene_pivot)

            changed = self.camera.is_changed() or rotated or preset_switched
            self.last_phase = self.scheduler.step(frame_world, self.camera, changed)

            self.present()
            self.update_caption()

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Interactive cube raytracer')
    parser.add_argument('--width', type=int, default=1300,
                        help='Window width')
    parser.add_argument('--height', type=int, default=900,
                        help='Window height')
    parser.add_argument('--scale', type=int, default=1,
                        help='Render at window size divided by this factor')
    parser.add_argument('--sky', choices=list(SKYBOX_PRESETS), default='default',
                        help='Sky preset')
    parser.add_argument('--rotate', action='store_true',
                        help='Start with the scene rotating')
    parser.add_argument('--samples-per-frame', type=int, default=None,
                        help='Pixels refined per frame once the view settles (default: pixels / 120)')
    parser.add_argument('--textures', metavar='DIR', default=None,
                        help='Directory with texture images; missing ones are generated and saved there')
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    settings = RenderSettings(
        width=args.width,
        height=args.height,
        render_scale=args.scale,
        samples_per_frame=args.samples_per_frame,
        sky=args.sky,
    )

    try:
        app = Application(settings, rotate=args.rotate, texture_dir=args.textures)
        app.run()
    except Exception as e:
        print(f"Error during execution: {e}")
        import traceback
        traceback.print_exc()
    finally:
        print("Cleaning up...")
        pygame.quit()

if __name__ == "__main__":
    main()
