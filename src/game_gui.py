import argparse
import sys

import pygame

import grid_engine
from best_score import BestScoreStore, BEST_SCORE_FILE


COLORS = {
    'background': (248, 250, 252),
    'grid_background': (165, 174, 185),
    'empty_cell': (203, 213, 225),
    'text_dark': (51, 65, 85),
    'text_light': (255, 255, 255),
    # tile colors
    2: (219, 234, 254),
    4: (191, 219, 254),
    8: (147, 197, 253),
    16: (96, 165, 250),
    32: (59, 130, 246),
    64: (37, 99, 235),
    128: (29, 78, 216),
    256: (30, 64, 175),
    512: (30, 58, 138),
    1024: (23, 37, 84),
    2048: (15, 23, 42),
}

KEY_TO_DIRECTION = {
    pygame.K_UP: 'up',
    pygame.K_DOWN: 'down',
    pygame.K_LEFT: 'left',
    pygame.K_RIGHT: 'right',
}


def get_tile_color(value):
    """background color for a tile value"""
    if value in COLORS:
        return COLORS[value]
    elif value > 2048:
        return COLORS[2048]
    else:
        return COLORS['empty_cell']


def get_text_color(value):
    if value <= 4:
        return COLORS['text_dark']
    return COLORS['text_light']


class GameGUI:
    def __init__(self, size=grid_engine.DEFAULT_SIZE, store=None, spawner=None):
        pygame.init()

        self.size = size
        self.store = store if store is not None else BestScoreStore()
        self.spawner = spawner
        self.state = grid_engine.new_game(size, best=self.store.load_best(), spawner=spawner)

        # GUI settings
        self.cell_size = 100
        self.cell_margin = 10
        self.header_height = 120

        grid_size = size * self.cell_size + (size + 1) * self.cell_margin
        self.window_width = grid_size
        self.window_height = grid_size + self.header_height

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("2048")

        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        self.clock = pygame.time.Clock()

    def restart(self):
        self.state = grid_engine.new_game(self.size, best=self.store.load_best(), spawner=self.spawner)
        print("Game restarted!")

    def apply_direction(self, direction):
        """move, then hand a possibly raised best score to the store"""
        outcome = grid_engine.move(self.state, direction, spawner=self.spawner)
        self.state = outcome.state
        if outcome.changed and self.state.score > 0:
            self.store.save_best(self.state.score)
        return outcome

    def draw_board(self):
        self.screen.fill(COLORS['background'])

        self.draw_header()

        grid_rect = pygame.Rect(0, self.header_height, self.window_width, self.window_width)
        pygame.draw.rect(self.screen, COLORS['grid_background'], grid_rect)

        for row in range(self.size):
            for col in range(self.size):
                self.draw_cell(row, col)

    def draw_header(self):
        """score, best and instructions"""
        score_text = self.font_large.render(f"Score: {self.state.score}", True, COLORS['text_dark'])
        self.screen.blit(score_text, (20, 20))

        best_text = self.font_medium.render(f"Best: {self.state.best}", True, COLORS['text_dark'])
        self.screen.blit(best_text, (self.window_width - best_text.get_width() - 20, 28))

        if self.state.over:
            instruction_text = "Game Over! Press R to restart"
            color = (200, 0, 0)
        else:
            instruction_text = "Use arrow keys to move tiles"
            color = COLORS['text_dark']

        instruction_surface = self.font_small.render(instruction_text, True, color)
        self.screen.blit(instruction_surface, (20, 70))

        restart_text = self.font_small.render("Press R to restart, ESC to quit", True, COLORS['text_dark'])
        self.screen.blit(restart_text, (20, 95))

    def draw_cell(self, row, col):
        value = self.state.board[row][col]

        x = col * (self.cell_size + self.cell_margin) + self.cell_margin
        y = row * (self.cell_size + self.cell_margin) + self.cell_margin + self.header_height

        cell_rect = pygame.Rect(x, y, self.cell_size, self.cell_size)
        pygame.draw.rect(self.screen, get_tile_color(value), cell_rect, border_radius=8)

        if value != 0:
            # font size by number of digits
            if value < 100:
                font = self.font_large
            elif value < 1000:
                font = self.font_medium
            else:
                font = self.font_small

            text_surface = font.render(str(value), True, get_text_color(value))
            text_rect = text_surface.get_rect()
            text_rect.center = (x + self.cell_size // 2, y + self.cell_size // 2)
            self.screen.blit(text_surface, text_rect)

    def handle_keypress(self, key):
        """returns False when the player quits"""
        if key == pygame.K_ESCAPE:
            return False

        elif key == pygame.K_r:
            self.restart()

        elif key in KEY_TO_DIRECTION and not self.state.over:
            self.apply_direction(KEY_TO_DIRECTION[key])

        return True

    def run(self):
        print("2048 Game Started!")
        print("Use arrow keys to move tiles")
        print("Press R to restart, ESC to quit")
        print()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self.handle_keypress(event.key)

            self.draw_board()
            pygame.display.flip()
            self.clock.tick(60)

        pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play 2048")
    parser.add_argument("--size", type=int, default=grid_engine.DEFAULT_SIZE, help="board size")
    parser.add_argument("--best-file", default=BEST_SCORE_FILE, help="where the best score is kept")
    args = parser.parse_args(argv)

    if args.size < 2:
        parser.error("--size must be at least 2")

    try:
        gui = GameGUI(size=args.size, store=BestScoreStore(args.best_file))
        gui.run()
    except Exception as e:
        print(f"Error running game: {e}")
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
