"""Geometric skin - shaded trench walls and block obstacles."""

from typing import Dict, Tuple

import pygame

from models import HudSnapshot
from rockrun.games.skin import VectorSkin, fade
from rockrun.sim import Obstacle, ObstacleKind

from ...config import THEMES
from ..corridor import bounds_at_row, theme_index

Color = Tuple[int, int, int]


class GeometricSkin(VectorSkin):
    """Renders the corridor as filled walls with scrolling floor lines.

    - Walls: polygons following the corridor bounds, colored per section
    - Obstacles: rectangles colored by kind, darkening as they take damage
    - Turrets: barrel dot; supplies: plus sign; exhaust port: target rings
    """

    NAME = "geometric"
    DESCRIPTION = "Shaded trench"

    TITLE = "TRENCH RUN"
    HELP_LINES = (
        "Left/Right to strafe, Up to surge, Space to fire",
        "Destroy the exhaust port at the end of the trench",
        "Press Enter or tap to start",
    )

    ROW_STEP = 16      # vertical sampling of the walls
    FLOOR_SPACING = 80

    KIND_COLORS: Dict[ObstacleKind, Color] = {
        ObstacleKind.ASTEROID: (200, 205, 214),
        ObstacleKind.CRATE: (180, 150, 110),
        ObstacleKind.PILLAR: (150, 160, 176),
        ObstacleKind.TURRET: (248, 113, 113),
        ObstacleKind.SUPPLY: (134, 239, 172),
        ObstacleKind.EXHAUST_PORT: (250, 204, 21),
    }

    def __init__(self):
        super().__init__()
        self._theme = THEMES[0]

    def render_background(self, screen: pygame.Surface, hud: HudSnapshot) -> None:
        screen.fill(self.BACKGROUND)
        width, height = screen.get_size()
        self._theme = THEMES[theme_index(hud.section, len(THEMES))]
        wall, floor, _ = self._theme

        # Floor lines scroll with distance
        offset = hud.distance % self.FLOOR_SPACING
        y = height + offset
        while y > -self.FLOOR_SPACING:
            pygame.draw.line(screen, floor, (0, int(y)), (width, int(y)), 1)
            y -= self.FLOOR_SPACING

        left_wall = [(0, height)]
        right_wall = [(width, height)]
        for y in range(height, -self.ROW_STEP, -self.ROW_STEP):
            left, right = bounds_at_row(hud.distance, y, width, height, hud.section)
            left_wall.append((left, y))
            right_wall.append((right, y))
        left_wall.append((0, left_wall[-1][1]))
        right_wall.append((width, right_wall[-1][1]))

        pygame.draw.polygon(screen, wall, left_wall)
        pygame.draw.polygon(screen, wall, right_wall)
        pygame.draw.lines(screen, self.LINE_COLOR, False, left_wall[1:-1], 2)
        pygame.draw.lines(screen, self.LINE_COLOR, False, right_wall[1:-1], 2)

    def render_obstacle(self, obstacle: Obstacle, screen: pygame.Surface) -> None:
        left, top, right, bottom = obstacle.get_bounds()
        rect = pygame.Rect(int(left), int(top), int(right - left), int(bottom - top))

        base = self.KIND_COLORS[obstacle.kind]
        damage = 1 - obstacle.hp / obstacle.traits.hit_points
        color = fade(base, 1 - damage * 0.5, self.BACKGROUND)

        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, self.LINE_COLOR, rect, 1)

        cx, cy = rect.center
        if obstacle.kind is ObstacleKind.TURRET:
            pygame.draw.circle(screen, self.LINE_COLOR, (cx, cy), max(3, rect.width // 6))
        elif obstacle.kind is ObstacleKind.SUPPLY:
            arm = rect.width // 3
            pygame.draw.line(screen, self.BACKGROUND, (cx - arm, cy), (cx + arm, cy), 3)
            pygame.draw.line(screen, self.BACKGROUND, (cx, cy - arm), (cx, cy + arm), 3)
        elif obstacle.kind is ObstacleKind.EXHAUST_PORT:
            accent = self._theme[2]
            for inset in (8, 16):
                ring = rect.inflate(-inset * 2, -inset)
                if ring.width > 0 and ring.height > 0:
                    pygame.draw.rect(screen, accent, ring, 2)

    def progress_text(self, hud: HudSnapshot) -> str:
        return f"Section {hud.section}   {int(hud.distance / 10)} m"
