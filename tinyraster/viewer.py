import argparse
import logging
import math
import os
import sys

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from .config import (DEFAULT_HEIGHT, DEFAULT_WIDTH, MAX_SUBDIVISIONS, ViewerConfig,
                     clamp_pitch, wrap_heading)
from .pipeline import render, save_frame
from .scene import sphere, tetrahedron

log = logging.getLogger(__name__)


# ============================================================
#  Command line
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="tinyraster",
        description="Software rasterizer demo: a flat-shaded tetrahedron / sphere.",
    )
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="canvas width in pixels")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="canvas height in pixels")
    parser.add_argument("--heading", type=float, default=180.0, help="initial heading, degrees (0..360)")
    parser.add_argument("--pitch", type=float, default=0.0, help="initial pitch, degrees (-90..90)")
    parser.add_argument("--subdivisions", type=int, default=0,
                        help=f"sphere refinement steps applied to the tetrahedron (0..{MAX_SUBDIVISIONS})")
    parser.add_argument("--fps", type=int, default=60, help="frame rate cap for the window")
    parser.add_argument("--snapshot", metavar="PATH",
                        help="render a single frame to PATH (png, bmp, ...) and exit without a window")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)
    try:
        args.config = ViewerConfig.from_args(args)
    except ValueError as e:
        parser.error(str(e))
    return args


def build_mesh(subdivisions: int):
    """Tetrahedron for level 0, otherwise the inflated sphere approximation."""
    if subdivisions == 0:
        return tetrahedron()
    return sphere(subdivisions)


def render_degrees(mesh, cfg: ViewerConfig):
    """Render with the config's angles, converting degrees -> radians."""
    return render(mesh, math.radians(cfg.heading), math.radians(cfg.pitch),
                  cfg.width, cfg.height, cfg.background)


def snapshot_name(index: int) -> str:
    """File name for the n-th snapshot taken from the window (S key)."""
    return f"tinyraster_{index:03d}.png"


def snapshot(cfg: ViewerConfig, path) -> None:
    mesh = build_mesh(cfg.subdivisions)
    save_frame(render_degrees(mesh, cfg), path)


# ============================================================
#  Main loop
# ============================================================

def run_window(cfg: ViewerConfig) -> None:
    """
    Interactive loop:
      - handle input (drag rotates, +/- refine, S saves, Esc quits)
      - render a fresh frame from the current angles
      - blit it and draw the HUD
    """
    mesh = build_mesh(cfg.subdivisions)

    pygame.init()
    screen = pygame.display.set_mode((cfg.width, cfg.height))
    pygame.display.set_caption("tinyraster: drag to rotate, +/- subdivide, S snapshot")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 14)

    # --- Pre-warm Numba (first call triggers compilation)
    render(tetrahedron(1.0), 0.0, 0.0, 4, 4)

    dragging = False
    last_mouse = (0, 0)
    shots = 0

    running = True
    while running:
        clock.tick(cfg.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    if cfg.subdivisions < MAX_SUBDIVISIONS:
                        cfg.subdivisions += 1
                        mesh = build_mesh(cfg.subdivisions)
                        log.info("subdivisions=%d (%d triangles)", cfg.subdivisions, len(mesh))
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    if cfg.subdivisions > 0:
                        cfg.subdivisions -= 1
                        mesh = build_mesh(cfg.subdivisions)
                        log.info("subdivisions=%d (%d triangles)", cfg.subdivisions, len(mesh))
                elif event.key == pygame.K_s:
                    save_frame(render_degrees(mesh, cfg), snapshot_name(shots))
                    shots += 1

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                dragging = True
                last_mouse = event.pos

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                dragging = False

            elif event.type == pygame.MOUSEMOTION and dragging:
                mx, my = event.pos
                lx, ly = last_mouse
                last_mouse = (mx, my)
                cfg.heading = wrap_heading(cfg.heading + (mx - lx) * cfg.drag_sensitivity)
                cfg.pitch = clamp_pitch(cfg.pitch + (my - ly) * cfg.drag_sensitivity)

        frame = render_degrees(mesh, cfg)

        # surfarray index order is [x, y, color]
        img = pygame.surfarray.pixels3d(screen)
        img[:, :, :] = frame.swapaxes(0, 1)
        del img

        hud = (f"heading {cfg.heading:5.1f}  pitch {cfg.pitch:5.1f}  "
               f"tris {len(mesh)}  FPS {clock.get_fps():.1f}")
        screen.blit(font.render(hud, True, (235, 235, 235)), (8, 8))

        pygame.display.flip()

    pygame.quit()


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s'
    )
    cfg = args.config
    if cfg.snapshot:
        snapshot(cfg, cfg.snapshot)
        return 0
    run_window(cfg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
