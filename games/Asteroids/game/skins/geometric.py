"""Geometric skin - outlined rocks on a sparse starfield."""

import math

import pygame

from models import HudSnapshot
from rockrun.games.skin import VectorSkin
from rockrun.sim import Obstacle


class GeometricSkin(VectorSkin):
    """Renders rocks as jagged line polygons.

    - Rocks: closed outline from the obstacle's verts
    - Background: fixed starfield, faint centre dot
    """

    NAME = "geometric"
    DESCRIPTION = "Line-art rocks"

    TITLE = "ASTEROIDS"
    ROCK_COLOR = (200, 205, 214)
    STAR_COLOR = (60, 64, 72)
    STAR_COUNT = 60

    def render_background(self, screen: pygame.Surface, hud: HudSnapshot) -> None:
        screen.fill(self.BACKGROUND)
        w, h = screen.get_size()
        for i in range(self.STAR_COUNT):
            screen.fill(self.STAR_COLOR, ((i * 9973) % w, (i * 6067) % h, 1, 1))
        screen.fill((24, 27, 35), (w // 2 - 1, h // 2 - 1, 2, 2))

    def render_obstacle(self, obstacle: Obstacle, screen: pygame.Surface) -> None:
        if len(obstacle.verts) < 3:
            pygame.draw.circle(screen, self.ROCK_COLOR,
                               (int(obstacle.x), int(obstacle.y)), int(obstacle.radius), 2)
            return

        points = [
            (obstacle.x + math.cos(t) * r, obstacle.y + math.sin(t) * r)
            for t, r in obstacle.verts
        ]
        pygame.draw.polygon(screen, self.ROCK_COLOR, points, 2)
