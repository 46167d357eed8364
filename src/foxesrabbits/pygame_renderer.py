import pygame
from dataclasses import dataclass

from foxesrabbits import game
from foxesrabbits.cells import Fox, Rabbit
from foxesrabbits.game import GameState, Speed, Status

SPEED_KEYS = {
    pygame.K_1: Speed.SLOW,
    pygame.K_2: Speed.NORMAL,
    pygame.K_3: Speed.FAST,
}


@dataclass
class GuiStyle:
    margin: int = 10
    panel_width: int = 240
    panel_padding: int = 12
    background_color: tuple = (245, 245, 245)
    panel_background: tuple = (235, 235, 235)
    grid_color: tuple = (210, 210, 210)
    grass_color: tuple = (200, 230, 190)
    fox_color: tuple = (220, 110, 40)
    rabbit_color: tuple = (60, 90, 220)
    text_color: tuple = (20, 20, 20)
    line_fox: tuple = (220, 110, 40)
    line_rabbit: tuple = (60, 90, 220)


class PyGameRenderer:
    """
    Grid viewer and keyboard control surface.
    space: pause/resume, r: reset, 1/2/3: slow/normal/fast, closing the window quits.
    """

    def __init__(self, columns: int, rows: int, cell_size: int = 48, history_max: int = 200):
        self.columns = columns
        self.rows = rows
        self.cell_size = cell_size
        self.style = GuiStyle()
        self.history_max = history_max

        window_width = self.style.margin * 2 + columns * cell_size + self.style.panel_width
        window_height = self.style.margin * 2 + rows * cell_size + 24
        pygame.init()
        self.screen = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption("Foxes & Rabbits")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 22)
        self.small_font = pygame.font.SysFont(None, 18)

    def close(self) -> None:
        pygame.quit()

    def update(self, state: GameState) -> bool:
        """Handles input, draws one frame and waits out the tick interval. False means quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                self._handle_key(state, event.key)

        self.screen.fill(self.style.background_color)
        self._draw_cells(state)
        self._draw_grid()
        self._draw_text(state)
        self._draw_panel(state)

        pygame.display.flip()
        self.clock.tick(state.speed.fps)
        return True

    def _handle_key(self, state: GameState, key: int) -> None:
        if key == pygame.K_SPACE:
            game.toggle_pause(state)
        elif key == pygame.K_r:
            game.reset(state)
        elif key in SPEED_KEYS:
            game.set_speed(state, SPEED_KEYS[key])

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            self.style.margin + x * self.cell_size,
            self.style.margin + y * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def _draw_grid(self) -> None:
        for x in range(self.columns + 1):
            x_pix = self.style.margin + x * self.cell_size
            pygame.draw.line(
                self.screen,
                self.style.grid_color,
                (x_pix, self.style.margin),
                (x_pix, self.style.margin + self.rows * self.cell_size),
                1,
            )
        for y in range(self.rows + 1):
            y_pix = self.style.margin + y * self.cell_size
            pygame.draw.line(
                self.screen,
                self.style.grid_color,
                (self.style.margin, y_pix),
                (self.style.margin + self.columns * self.cell_size, y_pix),
                1,
            )

    def _draw_cells(self, state: GameState) -> None:
        ref_energy = max(state.initial_energy, 1)
        for position, cell in state.grid.items():
            rect = self._cell_rect(position.x, position.y)
            pygame.draw.rect(self.screen, self.style.grass_color, rect)
            if isinstance(cell, Fox):
                color = self.style.fox_color
            elif isinstance(cell, Rabbit):
                color = self.style.rabbit_color
            else:
                continue
            # hungry animals shrink
            size_factor = min(cell.energy.value / ref_energy, 1.0)
            radius = max(3, int((self.cell_size // 2 - 2) * size_factor))
            pygame.draw.circle(self.screen, color, rect.center, radius)
            label = self.small_font.render(str(cell.energy.value), True, self.style.text_color)
            self.screen.blit(label, (rect.x + 2, rect.y + 2))

    def _draw_text(self, state: GameState) -> None:
        populations = state.populations
        text = f"day={state.days_elapsed} foxes={populations.foxes} rabbits={populations.rabbits}"
        surface = self.font.render(text, True, self.style.text_color)
        self.screen.blit(surface, (self.style.margin, self.style.margin + self.rows * self.cell_size + 2))

    def _draw_panel(self, state: GameState) -> None:
        panel_x = self.style.margin + self.columns * self.cell_size + self.style.margin
        panel_y = self.style.margin
        panel_w = self.style.panel_width - self.style.margin
        panel_h = self.rows * self.cell_size
        rect = pygame.Rect(panel_x, panel_y, panel_w, panel_h)
        pygame.draw.rect(self.screen, self.style.panel_background, rect)

        populations = state.populations
        stats = state.energy_history[-1] if state.energy_history else state.grid.energy_stats()
        y = panel_y + self.style.panel_padding
        y = self._draw_panel_line(panel_x, y, f"Day: {state.days_elapsed}", bold=True)
        status = "GAME OVER" if state.status is Status.ENDED else state.status.value
        y = self._draw_panel_line(panel_x, y, f"Status: {status}")
        y = self._draw_panel_line(panel_x, y, f"Speed: {state.speed.name.lower()}")
        y += 6
        y = self._draw_panel_line(panel_x, y, f"Foxes: {populations.foxes}  energy {stats.foxes.value}")
        y = self._draw_panel_line(panel_x, y, f"Rabbits: {populations.rabbits}  energy {stats.rabbits.value}")
        y += 6
        y = self._draw_panel_line(panel_x, y, "Fox config:", bold=True)
        y = self._draw_panel_config(panel_x, y, state.fox_config)
        y = self._draw_panel_line(panel_x, y, "Rabbit config:", bold=True)
        y = self._draw_panel_config(panel_x, y, state.rabbit_config)

        # Sparkline at bottom
        spark_h = 90
        spark_y = panel_y + panel_h - spark_h - self.style.panel_padding
        spark_rect = pygame.Rect(panel_x + self.style.panel_padding, spark_y, panel_w - 2 * self.style.panel_padding, spark_h)
        pygame.draw.rect(self.screen, (225, 225, 225), spark_rect)
        self._draw_sparkline(spark_rect, state.energy_history[-self.history_max:])

    def _draw_panel_line(self, x: int, y: int, text: str, bold: bool = False) -> int:
        font = self.font if bold else self.small_font
        surface = font.render(text, True, self.style.text_color)
        self.screen.blit(surface, (x + self.style.panel_padding, y))
        return y + surface.get_height() + 2

    def _draw_panel_config(self, x: int, y: int, config) -> int:
        for name, value in vars(config).items():
            y = self._draw_panel_line(x, y, f"  {name}: {value.value}")
        return y

    def _draw_sparkline(self, rect: pygame.Rect, history: list) -> None:
        if len(history) < 2:
            return
        max_energy = max(max(s.foxes.value for s in history), max(s.rabbits.value for s in history), 1)
        n = len(history)
        for i in range(1, n):
            x0 = rect.x + int((i - 1) / (n - 1) * rect.width)
            x1 = rect.x + int(i / (n - 1) * rect.width)

            y0 = rect.y + rect.height - int(history[i - 1].rabbits.value / max_energy * rect.height)
            y1 = rect.y + rect.height - int(history[i].rabbits.value / max_energy * rect.height)
            pygame.draw.line(self.screen, self.style.line_rabbit, (x0, y0), (x1, y1), 2)

            y0 = rect.y + rect.height - int(history[i - 1].foxes.value / max_energy * rect.height)
            y1 = rect.y + rect.height - int(history[i].foxes.value / max_energy * rect.height)
            pygame.draw.line(self.screen, self.style.line_fox, (x0, y0), (x1, y1), 2)
