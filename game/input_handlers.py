from __future__ import annotations

import pygame

MAX_USERNAME_LEN = 24


def handle_username_event(app, event: pygame.event.Event) -> bool:
    """Text entry for the username field. Returns True if the event was consumed."""
    if app.identity is not None or not app.username_focused:
        return False
    if event.type != pygame.KEYDOWN:
        return False
    if event.key == pygame.K_RETURN:
        app.submit_login()
        return True
    if event.key == pygame.K_BACKSPACE:
        app.username = app.username[:-1]
        return True
    if event.key == pygame.K_ESCAPE:
        app.username_focused = False
        return True
    if not event.unicode or not event.unicode.isprintable():
        return False
    char = event.unicode
    # space is the game trigger, never part of a username
    if char.isspace():
        return False
    if len(app.username) < MAX_USERNAME_LEN:
        app.username += char
    return True


def handle_mouse(app, pos: tuple[int, int]) -> bool:
    renderer = app.renderer
    if app.machine_finished() and renderer.restart_rect.collidepoint(pos):
        app.restart()
        return True
    if renderer.username_rect.collidepoint(pos):
        app.username_focused = app.identity is None
        return True
    app.username_focused = False
    if app.identity is not None:
        return False
    if renderer.login_rect.collidepoint(pos):
        app.submit_login()
        return True
    if renderer.register_rect.collidepoint(pos):
        app.submit_register()
        return True
    return False
