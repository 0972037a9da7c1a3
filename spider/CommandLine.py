import argparse
import logging

from spider import Rules
from spider.Core import Core
from spider.Interface import Interface
from spider_view.settings_store import load_settings, to_game_config
from spider_view.view_config import VARIANT_NAMES, VARIANT_ORDER

HELP = """Commands:
  mv P D       move the longest run on pile P onto pile D
  mv P I D     move the run starting at index I of pile P onto pile D
  deal         deal one card onto every pile
  undo         take back the last move or deal
  hint         list the legal moves
  new [V]      start a new game, optionally with V suits (1, 2 or 4)
  quit         leave"""


class CommandLineInterface(Interface):

    def __init__(self, out=None):
        super().__init__()
        self.out = out if out is not None else print
        self.dirty = False

    def printAll(self):
        core = self.core
        tableau = core.tableau
        self.out(f"{VARIANT_NAMES[core.variant]}   Completed: {core.completedCount}/{core.config.sequencesToWin}   "
                 f"Deals left: {core.dealsRemaining}   Moves: {core.moveCount}   Undos: {core.undoCount}")
        self.out("    " + "".join(f"{i:<5}" for i in range(len(tableau))))
        i = 0
        while True:
            has = False
            line = f"{i:>2}: "
            for pile in tableau:
                if len(pile) <= i:
                    line += "     "
                    continue
                has = True
                line += f"{pile[i].gameStr():<5}"
            if not has:
                break
            self.out(line.rstrip())
            i += 1
        self.out("")
        self.dirty = False

    def onStart(self):
        self.out("Game started!")
        self.printAll()

    def notifyRedraw(self):
        self.dirty = True

    def onWin(self):
        self.out(f"You win! {self.core.moveCount} moves in {self.core.elapsed():.0f}s")


def parseMove(core: Core, args):
    """Turns "P D" or "P I D" into (pile, index, dest); None if the input is malformed."""
    try:
        nums = [int(a) for a in args]
    except ValueError:
        return None
    if len(nums) == 2:
        pile, dest = nums
        tableau = core.tableau
        if pile < 0 or pile >= len(tableau) or dest < 0 or dest >= len(tableau):
            return None
        start = Rules.runStart(tableau[pile])
        if start is None:
            return None
        # pick the part of the run that fits the destination, if any
        destTop = Rules.lastOf(tableau[dest])
        for i in range(start, len(tableau[pile])):
            if Rules.canStackOn(tableau[pile][i], destTop):
                return pile, i, dest
        return pile, start, dest
    if len(nums) == 3:
        return nums[0], nums[1], nums[2]
    return None


def runCommand(core: Core, ui: CommandLineInterface, line: str) -> bool:
    """Executes one command line, returns False when the player wants to leave."""
    words = line.split()
    if not words:
        return True
    command, args = words[0].lower(), words[1:]
    if command in ("quit", "q", "exit"):
        return False
    if command == "new":
        variant = core.variant
        if args:
            try:
                variant = int(args[0])
            except ValueError:
                variant = None
            if variant not in VARIANT_ORDER:
                ui.out("Variant must be 1, 2 or 4!")
                return True
        core.newGame(variant)
        return True
    if command in ("help", "?"):
        ui.out(HELP)
        return True
    if core.isWon() and command != "undo":
        ui.out('The game is over, type "new" to play again.')
        return True

    if command == "mv":
        move = parseMove(core, args)
        if move is None:
            ui.out("Invalid index!")
        elif not core.applyMove(*move).success:
            ui.out("Cannot move!")
    elif command == "deal":
        if core.stockCount == 0:
            ui.out("No card left!")
        elif not core.dealFromStock().success:
            ui.out("Every pile needs a card before dealing!")
    elif command == "undo":
        if not core.undo().success:
            ui.out("Cannot undo!")
    elif command == "hint":
        moves = core.hints()
        if not moves:
            ui.out("No moves, try dealing." if core.isDealAllowed() else "No moves left.")
        for pile, index, dest in moves:
            ui.out(f"mv {pile} {index} {dest}")
    else:
        ui.out("Invalid command! Type 'help' for the list.")
    if ui.dirty:
        ui.printAll()
    return True


def buildParser():
    parser = argparse.ArgumentParser(prog="spider-solitaire", description="Play Spider Solitaire in the terminal.")
    parser.add_argument("--variant", type=int, choices=VARIANT_ORDER, help="number of suits")
    parser.add_argument("--seed", type=int, help="seed for a reproducible deal")
    parser.add_argument("--settings", help="path of the settings.ini to read")
    parser.add_argument("--log-level", default="WARNING",
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    return parser


def main(argv=None, readLine=input):
    args = buildParser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    settings = load_settings(args.settings)
    if args.variant is not None:
        settings["variant"] = str(args.variant)
    if args.seed is not None:
        settings["seed"] = str(args.seed)

    ui = CommandLineInterface()
    core = Core(to_game_config(settings))
    core.registerInterface(ui)
    core.newGame()
    while True:
        try:
            line = readLine()
        except EOFError:
            break
        if not runCommand(core, ui, line):
            break
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
