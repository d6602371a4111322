from typing import Optional

import pygame

from config.settings import Theme
from game.display import COLOR_ALERT, COLOR_GO, DisplayState, format_ms


class Renderer:
    """
    Renderer отвечает ТОЛЬКО за рисование.
    Он не считает время реакции и не управляет фазами.
    Ему дают DisplayState — он его рисует.
    """

    def __init__(self, screen: pygame.Surface, theme: Optional[Theme] = None):
        self.screen = screen
        self.w, self.h = screen.get_size()
        self.theme = theme or Theme()

        self.font_big = pygame.font.SysFont(None, 64)
        self.font_mid = pygame.font.SysFont(None, 40)
        self.font_small = pygame.font.SysFont(None, 28)

        # верхняя панель: логин
        self.username_rect = pygame.Rect(20, 20, 360, 44)
        self.login_rect = pygame.Rect(self.username_rect.right + 12, 20, 120, 44)
        self.register_rect = pygame.Rect(self.login_rect.right + 12, 20, 140, 44)

        # цветная игровая область под панелью
        top = 110
        self.game_area = pygame.Rect(0, top, self.w, self.h - top)

        self.restart_rect = pygame.Rect(0, 0, 380, 64)
        self.restart_rect.center = (self.game_area.centerx, self.game_area.bottom - 110)

        self.color_map = {
            COLOR_ALERT: self.theme.alert,
            COLOR_GO: self.theme.go,
        }

    def clear(self) -> None:
        self.screen.fill(self.theme.bg)

    def present(self) -> None:
        pygame.display.flip()

    def draw_auth_panel(
        self,
        username: str,
        focused: bool,
        logged_in: bool,
        best_time: str,
        notice: str,
    ) -> None:
        border = self.theme.text if focused else self.theme.button_disabled
        pygame.draw.rect(self.screen, (255, 255, 255), self.username_rect)
        pygame.draw.rect(self.screen, border, self.username_rect, width=2)
        text = username or ("" if focused else "Enter username (optional)")
        color = (20, 20, 20) if username else (130, 130, 130)
        surf = self.font_small.render(text + ("|" if focused else ""), True, color)
        self.screen.blit(surf, surf.get_rect(midleft=(self.username_rect.x + 10, self.username_rect.centery)))

        self.draw_button(self.login_rect, "Login", enabled=not logged_in)
        self.draw_button(self.register_rect, "Register", enabled=not logged_in)

        if best_time:
            surf = self.font_small.render(best_time, True, self.theme.text)
            self.screen.blit(surf, (self.username_rect.x, self.username_rect.bottom + 12))
        if notice:
            surf = self.font_small.render(notice, True, self.theme.text)
            self.screen.blit(surf, surf.get_rect(topright=(self.w - 20, self.username_rect.bottom + 12)))

    def draw_game_area(self, state: DisplayState) -> None:
        color = self.color_map.get(state.color, self.theme.neutral)
        pygame.draw.rect(self.screen, color, self.game_area)

        cx, cy = self.game_area.center
        msg = self.font_mid.render(state.message, True, self.theme.text)
        self.screen.blit(msg, msg.get_rect(center=(cx, cy - 40)))

        if state.reaction_time_ms is not None:
            line = f"Reaction Time: {format_ms(state.reaction_time_ms)}"
            surf = self.font_mid.render(line, True, self.theme.text)
            self.screen.blit(surf, surf.get_rect(center=(cx, cy + 20)))

        counter = self.font_small.render(state.trial_count, True, self.theme.text)
        self.screen.blit(counter, counter.get_rect(topright=(self.game_area.right - 20, self.game_area.y + 16)))

        if state.show_restart:
            self.draw_button(self.restart_rect, "Restart & Save Score", enabled=True, font=self.font_mid)

    def draw_button(self, rect: pygame.Rect, label: str, enabled: bool, font=None) -> None:
        font = font or self.font_small
        fill = self.theme.button if enabled else self.theme.button_disabled
        pygame.draw.rect(self.screen, fill, rect, border_radius=6)
        surf = font.render(label, True, (20, 20, 20))
        self.screen.blit(surf, surf.get_rect(center=rect.center))
