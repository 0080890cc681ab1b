# ===============================================================================
# Copyright (c) 2007 Jason Evans <jasone@canonware.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# ===============================================================================
#
"""
Canonical LR(1) automaton and parsing tables.

The Collection class builds the canonical collection of sets of LR(1)
items, breadth first, starting from closure({[S' ::= * S, $]}).  Item sets
with identical content are merged, so each state is discovered exactly
once and the transition relation is a function.

The ParseTables class projects a Collection into an ACTION table and a GOTO
table:

  ACTION[s, t] : Shift(s') when s has an item [A ::= a * t b, u] and the
                 transition (s, t) leads to s'.
                 Accept on $ when s contains [S' ::= S *, $].
                 Reduce(p) on u when s contains [A ::= g *, u] and p is the
                 index of A ::= g.

  GOTO[s, N] : The target of the transition (s, N), for non-terminals N.

A cell that would receive two different actions is a conflict.  The first
action written to the cell is kept, the other one is recorded in the
ConflictReport, and a ConflictWarning is issued.  States are visited in
state order and items in item order (production, dot position, lookahead),
so which action survives is the same from run to run.  With strict=True a
conflict is fatal and GrammarError is raised once all of them are known.
"""
import collections
import collections.abc
import logging
import warnings

from lrtable.errors import GrammarError, ConflictWarning
from lrtable.first import FirstSets
from lrtable.grammar import Terminal, Nonterminal
from lrtable.items import Item, ItemAlgebra

__all__ = ["Action", "ACCEPT", "ERROR", "Collection", "ActionTable",
           "GotoTable", "Conflict", "ConflictReport", "ParseTables",
           "build_tables"]

log = logging.getLogger(__name__)


class Action(collections.namedtuple("Action", ["kind", "value"])):
    """
A parsing action: (kind, value), where value is the target state of a
shift, the production index of a reduce, and None otherwise.  The set of
kinds is closed; code that consumes actions dispatches on kind.
"""
    __slots__ = ()

    SHIFT = "shift"
    REDUCE = "reduce"
    ACCEPT = "accept"
    ERROR = "error"

    @classmethod
    def shift(cls, nextState):
        return cls(cls.SHIFT, nextState)

    @classmethod
    def reduce(cls, production):
        return cls(cls.REDUCE, production)

    def __repr__(self):
        if self.kind == Action.SHIFT:
            return "[shift %d]" % self.value
        elif self.kind == Action.REDUCE:
            return "[reduce %d]" % self.value
        elif self.kind == Action.ACCEPT:
            return "[accept]"
        elif self.kind == Action.ERROR:
            return "[error]"
        else:
            assert False, self.kind

ACCEPT = Action(Action.ACCEPT, None)
ERROR = Action(Action.ERROR, None)


class Collection(object):
    """
The canonical collection of sets of LR(1) items for a grammar.

states : Closed item sets, indexed by state number.  State 0 is the start
         state.

transitions : Dictionary mapping (state, symbol) to the target state.
"""

    def __init__(self, grammar, algebra=None, verbose=False):
        if algebra is None:
            algebra = ItemAlgebra(grammar)
        assert algebra.grammar is grammar
        self._grammar = grammar
        self._algebra = algebra
        self._verbose = verbose

        self.states = []
        self.transitions = {}
        self._items()
        self.states = tuple(self.states)

    # Compute the collection of sets of LR(1) items.
    def _items(self):
        # State 0 is closure({[S' ::= * S, $]}).
        startProd = self._grammar.productions[0]
        tItemSet = self._algebra.closure(
            [Item(startProd, 0, self._grammar.eoi)]).withId(0)
        self.states.append(tItemSet)

        # itemSetsHash maps item set content to state number.
        itemSetsHash = {tItemSet: 0}

        # List of states that need to be processed, in discovery order.
        worklist = collections.deque([0])
        while len(worklist) > 0:
            i = worklist.popleft()
            itemSet = self.states[i]
            for sym in self._algebra.nextSymbols(itemSet):
                gotoSet = self._algebra.goto(itemSet, sym)
                if len(gotoSet) == 0:
                    continue
                j = itemSetsHash.get(gotoSet)
                if j is None:
                    j = len(self.states)
                    self.states.append(gotoSet.withId(j))
                    itemSetsHash[gotoSet] = j
                    worklist.append(j)
                assert (i, sym) not in self.transitions
                self.transitions[(i, sym)] = j

        if self._verbose:
            log.info("Collection: %d states, %d transitions",
                     len(self.states), len(self.transitions))
        else:
            log.debug("Collection: %d states, %d transitions",
                      len(self.states), len(self.transitions))

    def __len__(self):
        return len(self.states)

    def __getitem__(self, state):
        return self.states[state]

    def __iter__(self):
        return iter(self.states)

    def transition(self, state, sym):
        """The target of (state, sym), or None."""
        return self.transitions.get((state, sym))


class ActionTable(collections.abc.Mapping):
    """
ACTION[state, terminal].  Missing cells are errors.
"""

    def __init__(self, entries=()):
        self._entries = dict(entries)

    def __getitem__(self, key):
        return self._entries[key]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return "ActionTable(%r)" % self._entries

    def lookup_action(self, state, terminal):
        return self._entries.get((state, terminal), ERROR)

    def row(self, state):
        """The actions of one state, keyed by terminal."""
        return dict([(sym, action) for ((s, sym), action)
                     in self._entries.items() if s == state])


class GotoTable(collections.abc.Mapping):
    """
GOTO[state, non-terminal].  lookup_goto() returns None for a missing entry.
"""

    def __init__(self, entries=()):
        self._entries = dict(entries)

    def __getitem__(self, key):
        return self._entries[key]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return "GotoTable(%r)" % self._entries

    def lookup_goto(self, state, nonterm):
        return self._entries.get((state, nonterm))


class Conflict(object):
    """
Two different actions demanded for ACTION[state, terminal].  existing is
the action that stays in the table, rejected the one that was dropped.
"""

    def __init__(self, state, terminal, existing, rejected):
        self.state = state
        self.terminal = terminal
        self.existing = existing
        self.rejected = rejected

    def __getKind(self):
        kinds = set((self.existing.kind, self.rejected.kind))
        if kinds == set((Action.SHIFT, Action.REDUCE)):
            return "shift/reduce"
        elif kinds == set((Action.REDUCE,)):
            return "reduce/reduce"
        return "%s/%s" % (self.existing.kind, self.rejected.kind)

    kind = property(__getKind)

    def __eq__(self, other):
        if not isinstance(other, Conflict):
            return False
        return self.state == other.state \
            and self.terminal == other.terminal \
            and self.existing == other.existing \
            and self.rejected == other.rejected

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.state, self.terminal, self.existing, self.rejected))

    def __repr__(self):
        return "%s conflict in state %d on '%s': %r vs %r" % \
            (self.kind, self.state, self.terminal, self.existing,
             self.rejected)


class ConflictReport(object):
    def __init__(self, conflicts=()):
        self.conflicts = list(conflicts)

    def __getHasConflicts(self):
        return len(self.conflicts) > 0

    hasConflicts = property(__getHasConflicts)

    def __len__(self):
        return len(self.conflicts)

    def __iter__(self):
        return iter(self.conflicts)

    def __bool__(self):
        return self.hasConflicts

    def __eq__(self, other):
        if not isinstance(other, ConflictReport):
            return False
        return self.conflicts == other.conflicts

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        if not self.hasConflicts:
            return "ConflictReport(no conflicts)"
        return "ConflictReport(%s)" % \
            "; ".join(["%r" % conflict for conflict in self.conflicts])


class ParseTables(object):
    """
The read-only data structures that the Lr driver needs in order to parse
input.  A ParseTables instance can be shared by any number of parses.
"""

    def __init__(self, grammar, strict=False, verbose=False, _stacklevel=1):
        """
grammar : The Grammar to generate tables for.

strict : If true, raise GrammarError when the grammar is not LR(1),
         instead of keeping the first action written to each cell.

verbose : If true, log progress information at INFO instead of DEBUG.
"""
        assert type(strict) == bool
        assert type(verbose) == bool

        self._verbose = verbose
        self.grammar = grammar
        self.firstSets = FirstSets(grammar)
        self.algebra = ItemAlgebra(grammar, self.firstSets)
        self.collection = Collection(grammar, self.algebra, verbose)

        self._action = {}
        self._goto = {}
        self._conflicts = []
        self._lr()

        self.action = ActionTable(self._action)
        self.goto = GotoTable(self._goto)
        self.report = ConflictReport(self._conflicts)
        del self._action
        del self._goto
        del self._conflicts

        self.unused = self._unused()
        self._validate(strict, _stacklevel + 1)

    def __getConflicts(self):
        return self.report.conflicts

    conflicts = property(__getConflicts)

    def __getHasConflicts(self):
        return self.report.hasConflicts

    hasConflicts = property(__getHasConflicts)

    def __repr__(self):
        return "ParseTables: %d states, %d actions, %d gotos (%d conflicts)" \
            % (len(self.collection), len(self.action), len(self.goto),
               len(self.report))

    def __iter__(self):
        # Allows "action, goto, report = tables".
        return iter((self.action, self.goto, self.report))

    def lookup_action(self, state, terminal):
        return self.action.lookup_action(state, terminal)

    def lookup_goto(self, state, nonterm):
        return self.goto.lookup_goto(state, nonterm)

    # Compute LR parsing tables.
    def _lr(self):
        grammar = self.grammar
        collection = self.collection
        for itemSet in collection:
            state = itemSet.id
            for item in itemSet:
                sym = item.nextSymbol()
                # X ::= a*Ab
                if sym is not None:
                    if isinstance(sym, Terminal) and sym != grammar.eoi:
                        nextState = collection.transition(state, sym)
                        if nextState is not None:
                            self._actionAppend(state, sym,
                                               Action.shift(nextState))
                # S' ::= S*
                elif item.production.lhs == grammar.augmentedStart:
                    self._actionAppend(state, grammar.eoi, ACCEPT)
                # X ::= a*
                else:
                    self._actionAppend(state, item.lookahead,
                                       Action.reduce(item.production.index))

            for nonterm in grammar.nonterminals:
                nextState = collection.transition(state, nonterm)
                if nextState is not None:
                    self._goto[(state, nonterm)] = nextState

    # Add an action to a cell, unless the cell already holds one.
    def _actionAppend(self, state, sym, action):
        key = (state, sym)
        if key not in self._action:
            self._action[key] = action
            return
        existing = self._action[key]
        if existing != action:
            conflict = Conflict(state, sym, existing, action)
            self._conflicts.append(conflict)

    # Definitions that no state ever refers to.
    def _unused(self):
        used = set()
        productions = set()
        for itemSet in self.collection:
            for item in itemSet:
                productions.add(item.production)
                used.add(item.production.lhs)
                used.update(item.production.rhs)
                used.add(item.lookahead)

        unused = []
        for sym in self.grammar.terminals + self.grammar.nonterminals:
            if sym not in used:
                unused.append(sym)
        for production in self.grammar.productions:
            if production not in productions:
                unused.append(production)
        return unused

    # Report unused definitions and conflicts, then throw a GrammarError if
    # conflicts are fatal.
    def _validate(self, strict, stacklevel):
        lines = []
        if self.report.hasConflicts:
            nConflicts = len(self.report)
            lines.append("%d conflict%s, grammar is not LR(1)" %
                         (nConflicts, ("s", "")[nConflicts == 1]))
            for conflict in self.report:
                lines.append("  %r" % conflict)

        for elm in self.unused:
            if isinstance(elm, Terminal):
                lines.append("Unused terminal: %s" % elm)
            elif isinstance(elm, Nonterminal):
                lines.append("Unused non-terminal: %s" % elm)
            else:
                lines.append("Unused production: %r" % elm)

        for line in lines:
            log.warning("%s", line)

        if self._verbose:
            log.info("%r", self)
        else:
            log.debug("%r", self)

        # Warn on behalf of whoever asked for the tables.
        for conflict in self.report:
            warnings.warn("%r" % conflict, ConflictWarning,
                          stacklevel=stacklevel + 1)

        # Conflicts are fatal in strict mode.
        if strict and self.report.hasConflicts:
            raise GrammarError("\n".join(lines))


def build_tables(grammar, strict=False, verbose=False):
    """
    Generate canonical LR(1) parsing tables.

    :param grammar: a Grammar
    :return: (ActionTable, GotoTable, ConflictReport)
    """
    tables = ParseTables(grammar, strict=strict, verbose=verbose,
                         _stacklevel=2)
    return tables.action, tables.goto, tables.report
