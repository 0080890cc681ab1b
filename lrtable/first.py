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
FIRST sets.

first(X) is {X} for a terminal.  For a non-terminal it is the set of
terminals that can begin a string derived from X, plus epsilon if X is
nullable.  The sets for non-terminals are computed once, as a fixed point
over the productions, when a FirstSets instance is created.
"""
import logging

from lrtable.errors import GrammarError
from lrtable.grammar import epsilon

__all__ = ["FirstSets"]

log = logging.getLogger(__name__)


class FirstSets(object):
    def __init__(self, grammar):
        self._grammar = grammar
        self._firstSets = {}
        # FIRST of symbol strings, keyed by tuple.  Private to this grammar.
        self._cache = {}

        self._compute()

    # Compute the first sets for all symbols.
    def _compute(self):
        # Terminals.
        # first(X) is X for terminals.
        for sym in self._grammar.terminals:
            self._firstSets[sym] = set((sym,))

        # Non-terminals.
        for sym in self._grammar.nonterminals:
            self._firstSets[sym] = set()

        # Repeat the following loop until no more symbols can be added to any
        # first set.
        passes = 0
        done = False
        while not done:
            done = True
            passes += 1
            for prod in self._grammar.productions:
                firstSet = self._firstSets[prod.lhs]
                oldLen = len(firstSet)

                # Iterate through the RHS and merge the first sets into
                # this symbol's, until a preceding symbol's first set does
                # not contain epsilon.
                containsEpsilon = True
                for elm in prod.rhs:
                    elmFirst = self._firstSets[elm]
                    firstSet.update(elmFirst - set((epsilon,)))
                    if epsilon not in elmFirst:
                        containsEpsilon = False
                        break

                # Merge epsilon if the whole RHS is nullable, which includes
                # the empty production.
                if containsEpsilon:
                    firstSet.add(epsilon)

                if len(firstSet) != oldLen:
                    done = False

        for sym in self._firstSets:
            self._firstSets[sym] = frozenset(self._firstSets[sym])
        log.debug("FIRST sets converged after %d passes", passes)

    def first(self, sym):
        """
        :param sym: a terminal or non-terminal of the grammar
        :return: frozenset of terminals, possibly containing epsilon
        """
        try:
            return self._firstSets[sym]
        except KeyError:
            raise GrammarError("Unknown symbol: %s" % sym)

    def first_sequence(self, symbols):
        """
        Compute FIRST of a string of symbols.  Epsilon is included only if
        every symbol in the string is nullable, so the empty string yields
        {epsilon}.
        """
        s = tuple(symbols)
        firstSet = self._cache.get(s)
        if firstSet is None:
            result = set()
            mergeEpsilon = True
            for sym in s:
                symFirst = self.first(sym)
                result.update(symFirst - set((epsilon,)))
                if epsilon not in symFirst:
                    mergeEpsilon = False
                    break
            if mergeEpsilon:
                result.add(epsilon)
            firstSet = frozenset(result)
            self._cache[s] = firstSet
        return firstSet

    def nullable(self, sym):
        return epsilon in self.first(sym)

    def __getitem__(self, sym):
        return self.first(sym)

    def __iter__(self):
        return iter(self._grammar.terminals + self._grammar.nonterminals)

    def __repr__(self):
        lines = []
        for sym in self._grammar.nonterminals:
            syms = sorted(self._firstSets[sym], key=lambda s: s.seq)
            lines.append("FIRST(%s) = {%s}" %
                         (sym, ", ".join(["%s" % elm for elm in syms])))
        return "\n".join(lines)
