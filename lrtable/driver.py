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
Shift-reduce parse driver.

The Lr class runs the classic two-stack LR automaton over a complete token
sequence and records every step it takes.  A parse ends in exactly one of
two ways: the ACTION table says accept, or the driver cannot continue
(no action for the lookahead, no GOTO entry after a reduction, or a run
of reductions that comes back to a configuration it already left).
Either way the driver returns the ParseTrace collected so far; rejecting
malformed input is a normal outcome, not an exception.

A single set of tables can drive any number of parses, including
concurrent ones: all mutable state lives in the parse() call.
"""
import collections
import logging

from lrtable.errors import ParseError
from lrtable.grammar import EOI
from lrtable.lr_automaton import Action, ERROR, ParseTables

__all__ = ["ACCEPTED", "Step", "ParseTrace", "Lr", "parse"]

log = logging.getLogger(__name__)

ACCEPTED = "accepted"

# One row of a trace.  The stacks and the remaining input are snapshots taken
# before action is applied.  outcome is None for every step but the last,
# which carries either ACCEPTED or a ParseError.
Step = collections.namedtuple(
    "Step", ["stateStack", "symbolStack", "remaining", "action", "outcome"])


class ParseTrace(list):
    """
The ordered list of Steps taken by one parse.
"""

    def __getOutcome(self):
        if len(self) == 0:
            return None
        return self[-1].outcome

    outcome = property(__getOutcome)

    def __getAccepted(self):
        return self.outcome == ACCEPTED

    accepted = property(__getAccepted)

    def __getError(self):
        if isinstance(self.outcome, ParseError):
            return self.outcome
        return None

    error = property(__getError)

    def actions(self):
        return [step.action for step in self]

    def reductions(self):
        """
        Production indices in the order they were reduced.  For an accepted
        parse this is the rightmost derivation, in reverse.
        """
        return [step.action.value for step in self
                if step.action.kind == Action.REDUCE]


class Lr(object):
    """
LR(1) parser driver.

:param tables: a ParseTables instance, or an (ActionTable, GotoTable,
               ConflictReport) triple as returned by build_tables()
:param grammar: the grammar the tables were built from; optional when
                tables is a ParseTables instance
"""

    def __init__(self, tables, grammar=None):
        if isinstance(tables, ParseTables):
            if grammar is None:
                grammar = tables.grammar
            assert grammar is tables.grammar
            action, goto = tables.action, tables.goto
        else:
            action, goto = tuple(tables)[:2]
        assert grammar is not None
        self._grammar = grammar
        self._action = action
        self._goto = goto

    def __getGrammar(self):
        return self._grammar

    grammar = property(__getGrammar)

    def _input(self, tokens):
        grammar = self._grammar
        ret = []
        for token in tokens:
            if grammar.isTerminal(token):
                token = grammar.symbol(token)
            ret.append(token)
        # Append <$>, unless the caller already did.
        if len(ret) == 0 or ret[-1] != EOI:
            ret.append(grammar.eoi)
        return ret

    def parse(self, tokens):
        """
        Parse a sequence of terminal names.

        :param tokens: iterable of terminal names; "$" is appended if the
                       sequence does not already end with it, and is an
                       unexpected token anywhere else
        :return: ParseTrace
        """
        symbols = self._input(tokens)
        stateStack = [0]
        symbolStack = []
        pos = 0
        last = len(symbols) - 1
        trace = ParseTrace()
        # Configurations met since the last shift.  Reducing twice from the
        # same one without consuming input never terminates.
        reduced = set()

        while True:
            assert len(stateStack) == len(symbolStack) + 1
            top = stateStack[-1]
            sym = symbols[pos]
            if sym == EOI and pos != last:
                # <$> before the end of the input.
                action = ERROR
            else:
                action = self._action.lookup_action(top, sym)
            snapshot = (tuple(stateStack), tuple(symbolStack),
                        tuple(symbols[pos:]))
            log.debug("STACK: %r INPUT: %r --> %r",
                      snapshot[0], snapshot[2], action)

            if action.kind == Action.SHIFT:
                trace.append(Step(*(snapshot + (action, None))))
                symbolStack.append(sym)
                stateStack.append(action.value)
                pos += 1
                reduced.clear()
            elif action.kind == Action.REDUCE:
                production = self._grammar.productions[action.value]
                if snapshot[:2] in reduced:
                    error = ParseError(ParseError.REDUCTION_CYCLE, top, sym,
                                       production.index)
                    trace.append(Step(*(snapshot + (action, error))))
                    break
                reduced.add(snapshot[:2])
                nRhs = len(production.rhs)
                if nRhs > 0:
                    del stateStack[-nRhs:]
                    del symbolStack[-nRhs:]
                symbolStack.append(production.lhs)
                nextState = self._goto.lookup_goto(stateStack[-1],
                                                   production.lhs)
                if nextState is None:
                    error = ParseError(ParseError.NO_GOTO, stateStack[-1],
                                       production.lhs, production.index)
                    trace.append(Step(*(snapshot + (action, error))))
                    break
                trace.append(Step(*(snapshot + (action, None))))
                stateStack.append(nextState)
            elif action.kind == Action.ACCEPT:
                trace.append(Step(*(snapshot + (action, ACCEPTED))))
                break
            elif action.kind == Action.ERROR:
                error = ParseError(ParseError.UNEXPECTED_TOKEN, top, sym)
                trace.append(Step(*(snapshot + (action, error))))
                break
            else:
                assert False, action

        log.debug("Parse finished after %d steps: %r",
                  len(trace), trace.outcome)
        return trace


def parse(tables, grammar, tokens):
    """
    Run the LR driver over tokens.

    :return: ParseTrace, ending in ACCEPTED or a ParseError
    """
    return Lr(tables, grammar).parse(tokens)
