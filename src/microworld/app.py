"""
Explorer state and the interactive window loop.

MicroWorldExplorer is the render-loop context: it is built once, owns the
layers, the zoom position, the click bus, the slider and the tone bank, and
turns pointer/wheel/resize input into state changes between frames. Each
call to render_frame() draws the current and the incoming layer with
complementary opacity, then the slider overlay on top.
"""

from dataclasses import dataclass

import numpy as np
import pygame

from microworld.audio import AudioBank
from microworld.events import ClickEvent, ClickEventBus
from microworld.layers import FrameContext, build_layers
from microworld.slider import Slider
from microworld.zoom import BlendPair, ZoomController


@dataclass
class ExplorerConfig:
    """Configuration for the explorer window and its input mapping."""

    width: int = 1280
    height: int = 800
    fps: int = 60
    seed: int | None = None

    # Input
    wheel_sensitivity: float = 0.0016  # zoom units per wheel pixel
    wheel_notch: float = 100.0  # pixels reported per wheel click
    click_lifetime: int = 120  # frames

    # Slider
    slider_width: int = 320
    slider_height: int = 12
    slider_bottom_offset: int = 44

    # Audio
    audio_enabled: bool = True
    sample_rate: int = 44100
    audio_blocksize: int = 512

    # Cap on cells spawned by mitosis
    max_cells: int = 600

    # Autopilot
    drift: float = 0.0  # layers per second
    auto_click_interval: int = 0  # frames between synthetic clicks, 0 = off


class MicroWorldExplorer:
    """
    Cross-fading zoom through the layer stack.

    Input methods may be called any time between frames; render_frame()
    consumes the resulting state.
    """

    def __init__(self, config: ExplorerConfig | None = None, audio: AudioBank | None = None):
        self.cfg = config or ExplorerConfig()
        cfg = self.cfg

        self.rng = np.random.default_rng(cfg.seed)
        self.width = cfg.width
        self.height = cfg.height

        self.layers = build_layers(cfg.width, cfg.height, self.rng, cfg.max_cells)
        self.zoom = ZoomController(len(self.layers), cfg.wheel_sensitivity)
        self.clicks = ClickEventBus(cfg.click_lifetime)
        self.slider = Slider(cfg.slider_width, cfg.slider_height, cfg.slider_bottom_offset)
        self.slider.layout(cfg.width, cfg.height)
        self.audio = audio or AudioBank(cfg.sample_rate, cfg.audio_blocksize)
        self.realtime_audio = True

        self.frame_count = 0
        self.mouse = (0.0, 0.0)
        self.mouse_pressed = False

    @property
    def layer_names(self) -> list[str]:
        return [layer.name for layer in self.layers]

    # --- Input ---

    def press(self, x: float, y: float) -> ClickEvent:
        """Pointer down: start audio, maybe grab the slider, record the click."""
        self.mouse = (x, y)
        self.mouse_pressed = True

        if self.cfg.audio_enabled and not self.audio.ready:
            self.audio.start(realtime=self.realtime_audio)

        self.slider.press(x, y)
        return self.clicks.record(x, y, self.frame_count, self.zoom.nearest())

    def drag(self, x: float, y: float):
        self.mouse = (x, y)
        if self.mouse_pressed:
            self.slider.drag(x, self.zoom)

    def release(self):
        self.mouse_pressed = False
        self.slider.release()

    def wheel(self, delta_y: float):
        """Scroll by a browser-style pixel delta (positive = down)."""
        self.zoom.scroll(delta_y)

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        self.slider.layout(width, height)

    def handle_event(self, ev: pygame.event.Event) -> bool:
        """Dispatch one pygame event. Returns False when the user asks to quit."""
        if ev.type == pygame.QUIT:
            return False
        if ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
            return False

        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            self.press(*ev.pos)
        elif ev.type == pygame.MOUSEBUTTONUP and ev.button == 1:
            self.release()
        elif ev.type == pygame.MOUSEMOTION:
            self.drag(*ev.pos)
        elif ev.type == pygame.MOUSEWHEEL:
            # pygame reports +1 for scrolling up, browsers a negative pixel delta
            self.wheel(-ev.y * self.cfg.wheel_notch)
        elif ev.type == pygame.VIDEORESIZE:
            self.resize(ev.w, ev.h)
        return True

    # --- Rendering ---

    def context(self) -> FrameContext:
        return FrameContext(
            frame=self.frame_count,
            width=self.width,
            height=self.height,
            mouse=self.mouse,
            mouse_pressed=self.mouse_pressed,
            clicks=self.clicks,
            audio=self.audio,
        )

    def render_frame(self, surface: pygame.Surface) -> BlendPair:
        """
        Draw one frame.

        Args:
            surface: Target surface, normally the display surface.

        Returns:
            The blend pair that was drawn.
        """
        self.frame_count += 1
        if surface.get_size() != (self.width, self.height):
            self.resize(*surface.get_size())

        surface.fill((0, 0, 0))
        self.clicks.prune(self.frame_count)

        pair = self.zoom.pair()
        ctx = self.context()

        # Incoming layer is drawn last so it sits on top
        self.layers[pair.index].display(surface, pair.current_weight, ctx)
        self.layers[pair.next_index].display(surface, pair.next_weight, ctx)

        for layer in self.layers:
            if layer.index not in (pair.index, pair.next_index):
                layer.on_hidden(ctx)

        self.slider.draw(surface, self.zoom.level, self.layer_names)
        return pair


def run_window(config: ExplorerConfig | None = None):
    """Open a resizable window and run the explorer until it is closed."""
    from microworld.autopilot import Autopilot

    cfg = config or ExplorerConfig()

    pygame.init()
    pygame.display.set_mode((cfg.width, cfg.height), pygame.RESIZABLE)
    pygame.display.set_caption("Micro-World Explorer")
    clock = pygame.time.Clock()

    explorer = MicroWorldExplorer(cfg)
    autopilot = Autopilot.from_config(cfg, explorer.rng)

    running = True
    try:
        while running:
            for ev in pygame.event.get():
                if not explorer.handle_event(ev):
                    running = False

            if autopilot is not None:
                autopilot.step(explorer)

            explorer.render_frame(pygame.display.get_surface())
            pygame.display.flip()
            clock.tick(cfg.fps)
    finally:
        explorer.audio.stop()
        pygame.quit()
