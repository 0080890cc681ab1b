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
Context-free grammar model.

A Grammar is constructed once, validated, and never mutated afterwards.
Symbols are interned per grammar: each is a str subclass tagged as a
Terminal or a Nonterminal, so tables keyed by symbols can be looked up with
plain strings.  Every symbol carries a declaration sequence number, which
pins the iteration order of everything computed from the grammar.

Productions are numbered in declaration order.  Production 0 is always the
augmenting production S' ::= S, where S' is the augmented start symbol.

The GrammarBuilder class is the usual way to describe a grammar:

  builder = GrammarBuilder()
  builder.terminal("id", "*", "=")
  builder.nonterminal("S", "L", "R")
  builder.production("S", "L", "=", "R")
  builder.production("S", "R")
  builder.production("L", "*", "R")
  builder.production("L", "id")
  builder.production("R", "L")
  grammar = builder.build()
"""
import logging

from lrtable.errors import GrammarError

__all__ = ["Symbol", "Terminal", "Nonterminal", "Epsilon", "epsilon", "EOI",
           "Production", "Grammar", "GrammarBuilder"]

log = logging.getLogger(__name__)

# Name of the end-of-input terminal.  Every grammar declares it.
EOI = "$"


class Symbol(str):
    def __new__(cls, name, seq):
        assert isinstance(name, str), name
        return str.__new__(cls, name)

    def __init__(self, name, seq):
        self.name = name
        self.seq = seq

    def __repr__(self):
        return "%s" % self.name
    __str__ = __repr__

    def __getnewargs__(self):
        return (self.name, self.seq)


# AKA token.
class Terminal(Symbol):
    pass


class Nonterminal(Symbol):
    pass


# <e>.  Appears only inside FIRST sets.
class Epsilon(Symbol):
    def __new__(cls):
        return Symbol.__new__(cls, "<e>", -1)

    def __init__(self):
        Symbol.__init__(self, "<e>", -1)

    def __getnewargs__(self):
        return ()
epsilon = Epsilon()


class Production(object):
    """
A rewrite rule lhs ::= rhs.  Two productions are equal if their heads and
bodies are; the index only records the declaration position.
"""

    def __init__(self, index, lhs, rhs):
        assert isinstance(lhs, Nonterminal)
        if __debug__:
            for elm in rhs:
                assert isinstance(elm, Symbol)

        self.index = index
        self.lhs = lhs
        self.rhs = tuple(rhs)

    def __eq__(self, other):
        if not isinstance(other, Production):
            return False
        return self.lhs == other.lhs and self.rhs == other.rhs

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.lhs, self.rhs))

    def __len__(self):
        return len(self.rhs)

    def __repr__(self):
        return "%r ::= %s." % \
          (self.lhs, " ".join(["%r" % elm for elm in self.rhs]))


class Grammar(object):
    """
An immutable context-free grammar.

terminals : Terminal names, in declaration order.  The end-of-input
            terminal "$" is appended if it is not listed.

nonterminals : Non-terminal names, in declaration order.  The augmented
               start symbol is added if it is not listed.

productions : (lhs, rhs) pairs of names, in declaration order.  The first
              pair must be the augmenting production (augmentedStart,
              [start]).

start : The user start symbol.

augmentedStart : The head of production 0.
"""

    def __init__(self, terminals, nonterminals, productions, start,
                 augmentedStart):
        terminals = list(terminals)
        nonterminals = list(nonterminals)
        productions = [(lhs, list(rhs)) for (lhs, rhs) in productions]

        if len(productions) == 0:
            raise GrammarError("Grammar has no productions")
        if EOI not in terminals:
            terminals.append(EOI)
        if augmentedStart not in nonterminals:
            nonterminals.insert(0, augmentedStart)

        for name in terminals + nonterminals:
            if name == epsilon.name:
                raise GrammarError("Reserved symbol name: %s" % name)

        # Intern symbols.
        self._symbols = {}
        seq = 0
        for name in terminals:
            if name in self._symbols:
                raise GrammarError("Duplicate terminal: %s" % name)
            self._symbols[name] = Terminal(name, seq)
            seq += 1
        for name in nonterminals:
            if name in self._symbols:
                if isinstance(self._symbols[name], Terminal):
                    raise GrammarError(
                        "Identical terminal/non-terminal names: %s" % name)
                raise GrammarError("Duplicate non-terminal: %s" % name)
            self._symbols[name] = Nonterminal(name, seq)
            seq += 1

        self.terminals = tuple([self._symbols[name] for name in terminals])
        self.nonterminals = tuple([self._symbols[name]
                                   for name in nonterminals])
        self.eoi = self._symbols[EOI]

        if start not in self._symbols:
            raise GrammarError("Undeclared start symbol: %s" % start)
        if not isinstance(self._symbols[start], Nonterminal):
            raise GrammarError("Start symbol is a terminal: %s" % start)
        if start == augmentedStart:
            raise GrammarError(
                "Start symbol and augmented start symbol are identical: %s"
                % start)
        self.start = self._symbols[start]
        self.augmentedStart = self._symbols[augmentedStart]

        # Resolve production references.
        self.productions = []
        self._byLhs = dict([(nonterm, []) for nonterm in self.nonterminals])
        seen = set()
        for index, (lhs, rhs) in enumerate(productions):
            if lhs not in self._symbols:
                raise GrammarError(
                    "Unknown symbol '%s' as head of production %d" %
                    (lhs, index))
            head = self._symbols[lhs]
            if not isinstance(head, Nonterminal):
                raise GrammarError(
                    "Terminal '%s' as head of production %d" % (lhs, index))
            body = []
            for name in rhs:
                if name not in self._symbols:
                    raise GrammarError(
                        "Unknown symbol '%s' in production %d: %s ::= %s" %
                        (name, index, lhs, " ".join(rhs)))
                body.append(self._symbols[name])
            prod = Production(index, head, body)
            if prod in seen:
                raise GrammarError("Duplicate production: %r" % prod)
            seen.add(prod)
            self.productions.append(prod)
            self._byLhs[head].append(prod)
        self.productions = tuple(self.productions)
        for nonterm in self._byLhs:
            self._byLhs[nonterm] = tuple(self._byLhs[nonterm])

        self._checkAugmented()
        log.debug("Grammar: %d terminals, %d non-terminals, %d productions",
                  len(self.terminals), len(self.nonterminals),
                  len(self.productions))

    # S' ::= S must be production 0, and S' must not appear anywhere else.
    def _checkAugmented(self):
        startProd = self.productions[0]
        if startProd.lhs != self.augmentedStart \
                or startProd.rhs != (self.start,):
            raise GrammarError(
                "Production 0 must be %s ::= %s., not %r" %
                (self.augmentedStart, self.start, startProd))
        for prod in self.productions[1:]:
            if prod.lhs == self.augmentedStart:
                raise GrammarError(
                    "Augmented start symbol as head of production %d: %r" %
                    (prod.index, prod))
        for prod in self.productions:
            if self.augmentedStart in prod.rhs:
                raise GrammarError(
                    "Augmented start symbol in body of production %d: %r" %
                    (prod.index, prod))

    def __repr__(self):
        lines = []
        for prod in self.productions:
            lines.append("%d: %r" % (prod.index, prod))
        return "\n".join(lines)

    def symbol(self, name):
        try:
            return self._symbols[name]
        except KeyError:
            raise GrammarError("Unknown symbol: %s" % name)

    def isTerminal(self, sym):
        return isinstance(self._symbols.get(sym), Terminal)

    def isNonterminal(self, sym):
        return isinstance(self._symbols.get(sym), Nonterminal)

    def productionsFor(self, nonterm):
        return self._byLhs.get(nonterm, ())

    def productionIndex(self, production):
        for prod in self._byLhs.get(production.lhs, ()):
            if prod == production:
                return prod.index
        return -1


class GrammarBuilder(object):
    """
Collects declarations imperatively, then produces a frozen Grammar.  The
augmenting production is added by build(); its head is the start symbol's
name followed by as many primes as are needed to make it unique.
"""

    def __init__(self):
        self._terminals = []
        self._nonterminals = []
        self._productions = []
        self._start = None

    def terminal(self, *names):
        for name in names:
            if name not in self._terminals:
                self._terminals.append(name)
        return self

    def nonterminal(self, *names):
        for name in names:
            if name not in self._nonterminals:
                self._nonterminals.append(name)
        return self

    def production(self, lhs, *rhs):
        self._productions.append((lhs, list(rhs)))
        return self

    def start(self, name):
        self._start = name
        return self

    def build(self):
        if len(self._productions) == 0:
            raise GrammarError("Grammar has no productions")
        start = self._start
        if start is None:
            # Default to the head of the first production.
            start = self._productions[0][0]

        augmentedStart = start + "'"
        names = set(self._terminals) | set(self._nonterminals)
        while augmentedStart in names:
            augmentedStart += "'"

        productions = [(augmentedStart, [start])] + self._productions
        return Grammar(self._terminals, [augmentedStart] + self._nonterminals,
                       productions, start, augmentedStart)
