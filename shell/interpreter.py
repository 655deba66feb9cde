# interpreter.py
from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, Iterable, List, Optional, TextIO

from network.bayes_net import BayesNet, ResultState
from network.errors import BNError, UnknownNodeError
from network.probability import check_probability
from network.result import ClassificationResult

from .parser import CommandError, is_query, parse_query, split_words, strip_trailing_comment

logger = logging.getLogger(__name__)

HELP_TOPICS = {
    "new": ("\"new <nodename> <probability>\"",
            "Creates a new node with name <nodename> and probability <probability>."),
    "del": ("\"del <nodename>\"",
            "Deletes the node with name <nodename>."),
    "connect": ("\"connect <tailnode> to <headnode>\"",
                "Creates an arc from <tailnode> to <headnode>."),
    "is connected": ("\"is <tailnode> connected to <headnode>\"",
                     "Asks whether <tailnode> has a child <headnode>."),
    "disconnect": ("\"disconnect <tailnode> from <headnode>\"",
                   "Removes an arc from <tailnode> to <headnode>."),
    "list": ("\"list\"",
             "Lists all the possible system states."),
    "echo": ("\"echo [<text>]\"",
             "Prints <text> to the console."),
    "#": ("\"# [<text>]\"",
          "Starts a line comment."),
    "<nodename>": ("\"<nodename>\"",
                   "Print the node information."),
    "p": ("\"p(<posterioriVariables> | <aprioriVariables>)\"",
          "Makes a query.\n"
          "EXAMPLE 1: p(not var1 | var2, not var3)\n"
          "EXAMPLE 2: p(var1 | var2)\n"
          "EXAMPLE 3: p(var1)"),
    "quit": ("\"quit\"",
             "Quits the program."),
}


class Interpreter:
    """
    Line-oriented command shell over a BayesNet.

    Library errors (BNError) are reported as "ERROR: <message>" on `err` and
    the shell keeps going; the network is left as it was.
    """

    def __init__(
        self,
        net: Optional[BayesNet] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self.net = net if net is not None else BayesNet()
        self._out = out
        self._err = err
        self._commands: Dict[str, Callable[[List[str], str], None]] = {
            "new": self._cmd_new,
            "del": self._cmd_del,
            "connect": self._cmd_connect,
            "disconnect": self._cmd_disconnect,
            "is": self._cmd_is,
            "list": self._cmd_list,
            "echo": self._cmd_echo,
            "help": self._cmd_help,
        }

    # streams are resolved late so that redirected sys.stdout/sys.stderr are honoured
    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def error(self, message: str) -> None:
        print(f"ERROR: {message}", file=self.err)

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    def execute(self, line: str) -> bool:
        """
        Execute one command line. Returns False when the shell should stop.
        """
        command = line.strip()
        if not command or command.startswith("#"):
            return True
        if command == "quit":
            return False

        words = split_words(command)
        try:
            handler = self._commands.get(words[0])
            if handler is not None:
                handler(words, command)
            elif is_query(command):
                self._cmd_query(command)
            else:
                self._cmd_print_node(words)
        except BNError as e:
            logger.debug("Command %r failed: %s", command, e)
            self.error(str(e))
        return True

    def run(self, lines: Iterable[str], prompt: Optional[str] = None) -> bool:
        """
        Execute lines until exhausted or `quit`. Returns False if `quit` was seen.
        """
        if prompt:
            self.out.write(prompt)
            self.out.flush()
        for line in lines:
            if not self.execute(line):
                return False
            if prompt:
                self.out.write(prompt)
                self.out.flush()
        return True

    def run_file(self, path: str) -> bool:
        with open(path, "r", encoding="utf-8") as f:
            return self.run(f)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _cmd_new(self, words: List[str], command: str) -> None:
        if len(words) < 3:
            raise CommandError("Cannot parse 'new' command.")
        _, name, prob = strip_trailing_comment(words, 3)
        self.net.create_node(name, check_probability(prob))

    def _cmd_del(self, words: List[str], command: str) -> None:
        if len(words) < 2:
            raise CommandError("Missing the name of the node to delete.")
        self.net.delete_node(words[1])

    def _tail_head(self, words: List[str], keyword: str) -> tuple:
        if len(words) < 4:
            raise CommandError("Missing required tokens.")
        if words[2] != keyword:
            raise CommandError("Format error.")
        return words[1], words[3]

    def _cmd_connect(self, words: List[str], command: str) -> None:
        tail, head = self._tail_head(words, "to")
        self.net.connect(tail, head)

    def _cmd_disconnect(self, words: List[str], command: str) -> None:
        tail, head = self._tail_head(words, "from")
        self.net.disconnect(tail, head)

    def _cmd_is(self, words: List[str], command: str) -> None:
        if len(words) < 5 or words[2] != "connected" or words[3] != "to":
            raise CommandError("Bad format.")
        for name in (words[1], words[4]):
            if name not in self.net:
                raise UnknownNodeError(f"No node with name \"{name}\".")
        self._print("true" if self.net.has_edge(words[1], words[4]) else "false")

    def _refresh(self) -> ClassificationResult:
        """Re-classify if stale and report the run, like `list` does."""
        if self.net.state is ResultState.FRESH and self.net.last_result is not None:
            return self.net.last_result

        result = self.net.classify()
        self._print(f"Compiled the graph in {result.elapsed * 1000.0:.0f} milliseconds.")
        self._print(f"Number of possible states: {result.num_states}")
        return result

    def _cmd_list(self, words: List[str], command: str) -> None:
        result = self._refresh()
        self.out.write(result.render())

    def _cmd_echo(self, words: List[str], command: str) -> None:
        self._print(command[4:].strip())

    def _cmd_help(self, words: List[str], command: str) -> None:
        if len(words) == 1:
            for topic in HELP_TOPICS:
                self._print(f"  help {topic}")
            return

        topic = " ".join(words[1:])
        if topic == "is":
            raise CommandError("No help topic. Did you mean \"help is connected\"?")
        if topic not in HELP_TOPICS:
            raise CommandError(f"Unknown topic: \"{topic}\"")

        usage, description = HELP_TOPICS[topic]
        self._print(usage)
        self._print(description)

    def _cmd_query(self, command: str) -> None:
        posteriori, apriori = parse_query(command)
        result = self._refresh()
        self._print(repr(result.query(posteriori, apriori)))

    def _cmd_print_node(self, words: List[str]) -> None:
        (name,) = strip_trailing_comment(words, 1)
        if name not in self.net:
            raise CommandError(f"\"{name}\": no such node.")
        self._print(str(self.net.describe(name)))
