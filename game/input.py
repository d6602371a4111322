import pygame


class InputManager:
    """
    InputManager — прослойка между pygame и логикой игры.

    Игре всё равно, откуда пришло нажатие: пробел, клик мышью или тап пальцем —
    это одно и то же действие "activate". Время нажатия сюда не передаётся,
    его берёт игровой цикл.
    """

    def __init__(self, game_area: pygame.Rect, screen_size: tuple[int, int]):
        # клики/тапы засчитываются только внутри цветной области
        self.game_area = game_area
        self.screen_w, self.screen_h = screen_size

        # клавиши, которые запускают/останавливают попытку
        self.trigger_keys = {pygame.K_SPACE}

    def is_activate(self, event) -> bool:
        if event.type == pygame.KEYDOWN:
            return event.key in self.trigger_keys

        if event.type == pygame.MOUSEBUTTONDOWN:
            # pygame дублирует тап как клик мыши — его уже посчитали в FINGERDOWN
            if getattr(event, "touch", False):
                return False
            return event.button == 1 and self.game_area.collidepoint(event.pos)

        if event.type == pygame.FINGERDOWN:
            # координаты пальца нормированы в [0, 1]
            pos = (int(event.x * self.screen_w), int(event.y * self.screen_h))
            return self.game_area.collidepoint(pos)

        return False
