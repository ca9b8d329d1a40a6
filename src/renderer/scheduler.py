# renderer/scheduler.py
from enum import Enum
from renderer.raytracer import Renderer

# Frames after a camera change that are drawn with the adaptive passes
ADAPTIVE_FRAMES = 8
# Last frame that may run the single full-resolution pass
FULL_FRAMES = 20

class Phase(Enum):
    ADAPTIVE = "adaptive"
    FULL = "full"
    PROGRESSIVE = "progressive"
    IDLE = "idle"

class FrameScheduler:
    """
    Decides which render pass runs on each frame.

    Right after the view changes the image is rebuilt coarse-to-fine: a few
    adaptive frames whose level of detail drops by one every second frame,
    then one full-resolution pass, and past that a progressive refinement
    that shades samples_per_frame pixels per frame until the image is
    complete. Once complete the scheduler idles until the next change.
    """
    def __init__(self, renderer: Renderer, samples_per_frame: int,
                 start_lod: int = 4, target_lod: int = 1):
        self.renderer = renderer
        self.samples_per_frame = samples_per_frame
        self.start_lod = start_lod
        self.target_lod = target_lod

        self.frames_since_camera_change = 0
        self.current_lod = start_lod
        self.render_complete = False
        self.use_progressive = False
        self.current_sample = 0

    def reset(self):
        self.frames_since_camera_change = 0
        self.current_lod = self.start_lod
        self.render_complete = False
        self.use_progressive = False
        self.current_sample = 0

    def step(self, world, camera, camera_changed: bool) -> Phase:
        """Runs at most one render pass for this frame and returns which one it was."""
        if camera_changed:
            self.reset()

        frames = self.frames_since_camera_change
        if frames <= ADAPTIVE_FRAMES:
            self.renderer.render_adaptive(world, camera, self.current_lod, self.current_lod >= 4)
            phase = Phase.ADAPTIVE
        elif frames <= FULL_FRAMES:
            if self.render_complete:
                phase = Phase.IDLE
            else:
                self.renderer.render(world, camera)
                self.render_complete = True
                phase = Phase.FULL
        else:
            if not self.use_progressive:
                self.use_progressive = True
                self.current_sample = 0
                self.render_complete = False
            if self.render_complete:
                phase = Phase.IDLE
            else:
                self.current_sample, self.render_complete = self.renderer.render_progressive(
                    world, camera, self.samples_per_frame, self.current_sample)
                phase = Phase.PROGRESSIVE

        self.frames_since_camera_change += 1
        if self.frames_since_camera_change % 2 == 0 and self.current_lod > self.target_lod:
            self.current_lod -= 1

        return phase
