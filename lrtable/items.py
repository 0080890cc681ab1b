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
LR(1) items and the two operators over sets of them, closure and goto.

An item [A ::= a * b, t] records that the production A ::= a b has been
recognized up to the dot, and that it may only be reduced when the next
terminal is t.  Items and item sets are immutable values: equality and
hashing are structural, which is what lets the collection builder merge
states that have the same content.
"""
from lrtable.first import FirstSets
from lrtable.grammar import Production, Terminal, Nonterminal, epsilon

__all__ = ["Item", "ItemSet", "ItemAlgebra"]


class Item(object):
    def __init__(self, production, dotPos, lookahead):
        assert isinstance(production, Production)
        assert type(dotPos) == int
        assert dotPos >= 0
        assert dotPos <= len(production.rhs)
        assert isinstance(lookahead, Terminal), lookahead

        self.production = production
        self.dotPos = dotPos
        self.lookahead = lookahead
        self._hash = hash((production, dotPos, lookahead))

    def __eq__(self, other):
        if not isinstance(other, Item):
            return False
        return self.dotPos == other.dotPos \
            and self.lookahead == other.lookahead \
            and self.production == other.production

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return self._hash

    # Items are ordered by production declaration, dot position, then
    # lookahead declaration.
    def key(self):
        return (self.production.index, self.dotPos, self.lookahead.seq)

    def __lt__(self, other):
        return self.key() < other.key()

    def __repr__(self):
        strs = []
        strs.append("[%r ::=" % self.production.lhs)
        i = 0
        while i < self.dotPos:
            strs.append(" %r" % self.production.rhs[i])
            i += 1
        strs.append(" *")
        while i < len(self.production.rhs):
            strs.append(" %r" % self.production.rhs[i])
            i += 1
        strs.append("., %r]" % self.lookahead)
        return "".join(strs)

    def nextSymbol(self):
        """The symbol after the dot, or None for a complete item."""
        if self.dotPos < len(self.production.rhs):
            return self.production.rhs[self.dotPos]
        return None

    def isComplete(self):
        return self.dotPos == len(self.production.rhs)

    def advance(self):
        assert not self.isComplete()
        return Item(self.production, self.dotPos + 1, self.lookahead)


class ItemSet(object):
    """
An immutable set of items.  Iteration follows item order, so anything
derived from an ItemSet by iterating over it is reproducible.  id is the
state number once the set has been registered in a Collection.
"""

    def __init__(self, items=(), id=None):
        self._items = frozenset(items)
        self._order = tuple(sorted(self._items))
        self.id = id

    def withId(self, id):
        ret = ItemSet((), id)
        ret._items = self._items
        ret._order = self._order
        return ret

    def __repr__(self):
        if self.id is None:
            return "ItemSet(%s)" % ", ".join(["%r" % item for item in self])
        return "ItemSet %d(%s)" % \
            (self.id, ", ".join(["%r" % item for item in self]))

    def __hash__(self):
        return hash(self._items)

    def __eq__(self, other):
        if isinstance(other, ItemSet):
            return self._items == other._items
        if isinstance(other, (set, frozenset)):
            return self._items == other
        return False

    def __ne__(self, other):
        return not self == other

    def __iter__(self):
        return iter(self._order)

    def __len__(self):
        return len(self._items)

    def __contains__(self, item):
        return item in self._items

    def kernel(self):
        """Items with the dot past the beginning, plus the start item."""
        return ItemSet([item for item in self._order
                        if item.dotPos != 0 or item.production.index == 0])


class ItemAlgebra(object):
    """
Closure and goto for a single grammar.

:param grammar: the grammar whose productions expand non-terminals
:param firstSets: FIRST sets of the same grammar; computed if omitted
"""

    def __init__(self, grammar, firstSets=None):
        if firstSets is None:
            firstSets = FirstSets(grammar)
        self._grammar = grammar
        self._firstSets = firstSets

    def __getGrammar(self):
        return self._grammar

    grammar = property(__getGrammar)

    def __getFirstSets(self):
        return self._firstSets

    firstSets = property(__getFirstSets)

    def closure(self, items):
        """
        Saturate items: for each [A ::= a * B b, t] with B a non-terminal,
        add [B ::= * g, u] for every production B ::= g and every terminal u
        in first(b t).

        :param items: an iterable of Item
        :return: ItemSet
        """
        closure = set(items)
        # Iterate over the items until no more can be added to the closure.
        worklist = sorted(closure)
        i = 0
        while i < len(worklist):
            item = worklist[i]
            i += 1
            sym = item.nextSymbol()
            if not isinstance(sym, Nonterminal):
                continue

            rhs = item.production.rhs
            string = rhs[item.dotPos + 1:] + (item.lookahead,)
            lookaheads = [la for la in self._firstSets.first_sequence(string)
                          if la != epsilon]
            # first(b t) never contains epsilon since t is a terminal.
            assert len(lookaheads) > 0
            lookaheads.sort(key=lambda la: la.seq)
            for prod in self._grammar.productionsFor(sym):
                for lookahead in lookaheads:
                    tItem = Item(prod, 0, lookahead)
                    if tItem not in closure:
                        closure.add(tItem)
                        worklist.append(tItem)
        return ItemSet(closure)

    def goto(self, items, sym):
        """
        Advance the dot over sym in every item that allows it and close the
        result.  The result is empty if no item has sym after its dot.
        """
        kernel = []
        for item in items:
            if item.nextSymbol() == sym:
                kernel.append(item.advance())
        if len(kernel) == 0:
            return ItemSet()
        return self.closure(kernel)

    def nextSymbols(self, items):
        """
        The symbols that appear immediately after a dot, in the order they
        are first met while iterating over items.
        """
        syms = []
        seen = set()
        for item in items:
            sym = item.nextSymbol()
            if sym is not None and sym not in seen:
                seen.add(sym)
                syms.append(sym)
        return syms
