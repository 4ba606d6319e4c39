"""Graphical front end: the menu, the play screen, its dialogs and the action log."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

import pygame

from coupgame.session import DEFAULT_LOG_LINES, GameSession, WindowState

WIN_W = 1000
WIN_H = 800
LOG_H = 200
MENU_H = 60
PANEL_W = 300
PANEL_PAD = 15
BUTTON_W = 100
BUTTON_H = 40
BUTTON_SP = 20

TARGET_DIALOG_W = 300
TARGET_DIALOG_PAD = 10
TARGET_ENTRY_H = 35
WINNER_DIALOG_W = 400
WINNER_DIALOG_H = 200
ADD_DIALOG_W = 300
ADD_DIALOG_H = 80
PLAYER_ROW_H = 50
BANK_RADIUS = 40
POPUP_SECONDS = 2.0
FRAME_RATE = 30

PANEL_BG = (120, 119, 119)
PANEL_OUTLINE = (100, 100, 100)
BUTTON_BG = (80, 80, 200)
TEXT_COLOR = (230, 230, 230)
DIALOG_BG = (50, 50, 60, 230)
MENU_BG = (20, 20, 20)
MENU_BAR = (40, 40, 40)
BANK_COLOR = (200, 180, 50)
COIN_COLOR = (212, 175, 55)
ROLE_COLOR = (0, 0, 255)
CURRENT_COLOR = (255, 255, 0)
WHITE = (255, 255, 255)
BLOCK_COLOR = (200, 0, 0)
CONTINUE_COLOR = (0, 200, 0)

FONT_PATH = Path("assets") / "sansation.ttf"


def action_button_positions(count: int) -> list[tuple[float, float]]:
    """Top-left corners of ``count`` action buttons centred along the bottom edge."""
    if count <= 0:
        return []
    total_w = count * BUTTON_W + (count - 1) * BUTTON_SP
    start_x = (WIN_W - total_w) / 2
    y = WIN_H - BUTTON_H - PANEL_PAD
    return [(start_x + i * (BUTTON_W + BUTTON_SP), y) for i in range(count)]


@dataclass
class _Button:
    label: str
    rect: pygame.Rect
    on_click: Callable[[], None]
    color: tuple = field(default=BUTTON_BG)


def _rect(x: float, y: float, w: float = BUTTON_W, h: float = BUTTON_H) -> pygame.Rect:
    return pygame.Rect(int(x), int(y), int(w), int(h))


class GameWindow:
    """Window that shows a game session and turns clicks and keys into its actions."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session if session is not None else GameSession()
        self._show_add_dialog = False
        self._new_player_name = ""
        self._popup_text: Optional[str] = None
        self._popup_started = 0.0
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._fonts: dict[int, pygame.font.Font] = {}

    # ------------------------------------------------------------- buttons

    def _open_add_dialog(self) -> None:
        self._new_player_name = ""
        self._show_add_dialog = True

    def _menu_buttons(self) -> list[_Button]:
        x = PANEL_PAD
        y = PANEL_PAD / 2
        return [
            _Button("Add Player", _rect(x, y), self._open_add_dialog),
            _Button("Start Game", _rect(x + BUTTON_W + BUTTON_SP, y), self.session.start_game),
        ]

    def _action_buttons(self) -> list[_Button]:
        actions = self.session.available_actions()
        return [
            _Button(action, _rect(x, y), lambda action=action: self.session.perform(action))
            for action, (x, y) in zip(actions, action_button_positions(len(actions)))
        ]

    def _target_dialog_rect(self) -> pygame.Rect:
        count = len(self.session.target_candidates())
        height = count * TARGET_ENTRY_H + TARGET_DIALOG_PAD * 2
        x = (WIN_W - TARGET_DIALOG_W) / 2
        y = (WIN_H - height) / 2
        return _rect(x, y, TARGET_DIALOG_W, height)

    def _target_buttons(self) -> list[_Button]:
        dialog = self._target_dialog_rect()
        y = dialog.y + TARGET_DIALOG_PAD
        buttons = []
        for target in self.session.target_candidates():
            rect = _rect(
                dialog.x + TARGET_DIALOG_PAD,
                y,
                TARGET_DIALOG_W - TARGET_DIALOG_PAD * 2,
                TARGET_ENTRY_H - 5,
            )
            buttons.append(
                _Button(target.name, rect, lambda target=target: self.session.choose_target(target))
            )
            y += TARGET_ENTRY_H
        return buttons

    def _block_coup_buttons(self) -> list[_Button]:
        general = self.session.block_coup_general
        players = self.session.game.player_objects()
        index = next((i for i, p in enumerate(players) if p is general), len(players))
        y = MENU_H + PANEL_PAD + index * PLAYER_ROW_H
        x = PANEL_PAD + PANEL_W + 20
        return [
            _Button(
                "Block Coup",
                _rect(x, y),
                lambda: self.session.resolve_block_coup(True),
                BLOCK_COLOR,
            ),
            _Button(
                "Continue",
                _rect(x + BUTTON_W + BUTTON_SP, y),
                lambda: self.session.resolve_block_coup(False),
                CONTINUE_COLOR,
            ),
        ]

    def _winner_dialog_rect(self) -> pygame.Rect:
        return _rect(
            (WIN_W - WINNER_DIALOG_W) / 2,
            (WIN_H - WINNER_DIALOG_H) / 2,
            WINNER_DIALOG_W,
            WINNER_DIALOG_H,
        )

    def _quit(self) -> None:
        self._running = False

    def _winner_buttons(self) -> list[_Button]:
        dialog = self._winner_dialog_rect()
        x = dialog.x + 20
        y = dialog.y + 100
        return [
            _Button("Play Again", _rect(x, y), self.session.play_again),
            _Button("Quit", _rect(x + BUTTON_W + BUTTON_SP, y), self._quit),
        ]

    def _buttons(self) -> list[_Button]:
        """Buttons that currently react to clicks, most modal first."""
        session = self.session
        if session.state is WindowState.MENU:
            return [] if self._show_add_dialog else self._menu_buttons()
        if session.block_coup_pending:
            return self._block_coup_buttons()
        if session.show_winner_dialog:
            return self._winner_buttons()
        if session.show_target_dialog:
            return self._target_buttons()
        return self._action_buttons()

    # -------------------------------------------------------------- input

    def _refresh(self) -> None:
        if self.session.state is WindowState.PLAYING:
            self.session.check_winner()
        if self.session.popup is not None:
            self._popup_text = self.session.popup
            self._popup_started = time.monotonic()
            self.session.popup = None

    def _click(self, pos: tuple[int, int]) -> None:
        for button in self._buttons():
            if button.rect.collidepoint(pos):
                button.on_click()
                break
        self._refresh()

    def _type_char(self, char: str) -> None:
        """Feed one typed character to the add-player dialog."""
        if not self._show_add_dialog:
            return
        if char == "\b":
            self._new_player_name = self._new_player_name[:-1]
        elif char in ("\r", "\n"):
            self.session.add_player(self._new_player_name)
            self._show_add_dialog = False
        elif len(char) == 1 and 32 <= ord(char) < 127:
            self._new_player_name += char
        self._refresh()

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._click(event.pos)
        elif event.type == pygame.TEXTINPUT:
            for char in event.text:
                self._type_char(char)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_BACKSPACE:
                self._type_char("\b")
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self._type_char("\r")

    # ------------------------------------------------------------ drawing

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            try:
                font = pygame.font.Font(str(FONT_PATH), size)
            except (OSError, FileNotFoundError):
                font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def _text(self, surface, text, pos, size=18, color=WHITE, bold=False) -> pygame.Rect:
        font = self._font(size)
        font.set_bold(bold)
        image = font.render(text, True, color)
        font.set_bold(False)
        return surface.blit(image, pos)

    def _draw_dialog_bg(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
        overlay.fill(DIALOG_BG)
        surface.blit(overlay, rect.topleft)

    def _draw_buttons(self, surface: pygame.Surface, buttons: Sequence[_Button]) -> None:
        for button in buttons:
            pygame.draw.rect(surface, button.color, button.rect)
            self._text(surface, button.label, (button.rect.x + 10, button.rect.y + 6), 16)

    def _popup_visible(self) -> bool:
        if self._popup_text is None:
            return False
        if time.monotonic() - self._popup_started >= POPUP_SECONDS:
            self._popup_text = None
            return False
        return True

    def _draw_menu(self, surface: pygame.Surface) -> None:
        surface.fill(MENU_BG)
        pygame.draw.rect(surface, MENU_BAR, _rect(0, 0, WIN_W, MENU_H))
        self._draw_buttons(surface, self._menu_buttons())
        if self._show_add_dialog:
            dialog = _rect(
                (WIN_W - ADD_DIALOG_W) / 2,
                (WIN_H - ADD_DIALOG_H) / 2,
                ADD_DIALOG_W,
                ADD_DIALOG_H,
            )
            self._draw_dialog_bg(surface, dialog)
            self._text(surface, "Enter name:", (dialog.x + 10, dialog.y + 10))
            self._text(surface, self._new_player_name, (dialog.x + 10, dialog.y + 40), 20)
        if self._popup_visible():
            width = self._font(18).size(self._popup_text)[0]
            self._text(surface, self._popup_text, ((WIN_W - width) / 2, MENU_H + PANEL_PAD))

    def _draw_players(self, surface: pygame.Surface) -> None:
        game = self.session.game
        current = game.current_player()
        y = MENU_H + PANEL_PAD
        for player in game.player_objects():
            is_current = player is current
            self._text(
                surface,
                player.name,
                (PANEL_PAD, y),
                color=CURRENT_COLOR if is_current else WHITE,
                bold=is_current,
            )
            coins = self.session.visible_coins(player)
            if coins is not None:
                self._text(surface, str(coins), (PANEL_PAD + 120, y), color=COIN_COLOR)
            self._text(surface, player.role(), (PANEL_PAD + 200, y), color=ROLE_COLOR)
            y += PLAYER_ROW_H

    def _draw_play(self, surface: pygame.Surface) -> None:
        session = self.session
        surface.fill((0, 0, 0))
        panel = _rect(0, 0, PANEL_W, WIN_H)
        pygame.draw.rect(surface, PANEL_BG, panel)
        pygame.draw.rect(surface, PANEL_OUTLINE, panel, 2)
        self._draw_players(surface)

        if session.game.player_objects():
            turn = f"Turn: {session.game.turn()}"
            width = self._font(20).size(turn)[0]
            self._text(surface, turn, (WIN_W - width - PANEL_PAD, PANEL_PAD), 20, TEXT_COLOR)

        bank_center = ((WIN_W + PANEL_W) // 2, MENU_H + PANEL_PAD + BANK_RADIUS)
        pygame.draw.circle(surface, BANK_COLOR, bank_center, BANK_RADIUS)
        self._draw_buttons(surface, self._action_buttons())

        if session.show_target_dialog and not session.block_coup_pending:
            self._draw_dialog_bg(surface, self._target_dialog_rect())
            self._draw_buttons(surface, self._target_buttons())

        if self._popup_visible():
            width = self._font(18).size(self._popup_text)[0]
            x = PANEL_W + (WIN_W - PANEL_W - width) / 2
            y = MENU_H + PANEL_PAD + BANK_RADIUS * 2 + PANEL_PAD
            self._text(surface, self._popup_text, (x, y))

        if session.block_coup_pending:
            self._draw_buttons(surface, self._block_coup_buttons())

        if session.show_winner_dialog:
            dialog = self._winner_dialog_rect()
            self._draw_dialog_bg(surface, dialog)
            self._text(
                surface,
                f"{session.winner_name} is the winner!",
                (dialog.x + 20, dialog.y + 20),
                24,
            )
            self._draw_buttons(surface, self._winner_buttons())

        self._draw_log(surface)

    def _draw_log(self, surface: pygame.Surface) -> None:
        pygame.draw.rect(surface, MENU_BG, _rect(0, WIN_H, WIN_W, LOG_H))
        y = WIN_H + 10
        for line in self.session.log_tail(DEFAULT_LOG_LINES):
            self._text(surface, line, (10, y), 14)
            y += 20

    # ---------------------------------------------------------- main loop

    def _ensure_display(self) -> pygame.Surface:
        playing = self.session.state is WindowState.PLAYING
        size = (WIN_W, WIN_H + LOG_H) if playing else (WIN_W, WIN_H)
        if self._screen is None or self._screen.get_size() != size:
            self._screen = pygame.display.set_mode(size)
            pygame.display.set_caption("Coup – Playing" if playing else "Coup – Menu")
        return self._screen

    def run(self) -> None:
        """Show the window until it is closed or Quit is chosen."""
        pygame.init()
        try:
            clock = pygame.time.Clock()
            self._running = True
            while self._running:
                screen = self._ensure_display()
                for event in pygame.event.get():
                    self._handle_event(event)
                    if not self._running:
                        break
                if not self._running:
                    break
                self._refresh()
                screen = self._ensure_display()
                if self.session.state is WindowState.MENU:
                    self._draw_menu(screen)
                else:
                    self._draw_play(screen)
                pygame.display.flip()
                clock.tick(FRAME_RATE)
        finally:
            self._screen = None
            self._fonts.clear()
            pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window."""
    parser = argparse.ArgumentParser(prog="coupgame", description="Play Coup on one screen.")
    parser.parse_args(argv)
    GameWindow(GameSession()).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())