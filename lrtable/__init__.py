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
The lrtable package implements a canonical LR(1) parser generator, and a
driver that runs the generated tables over a sequence of terminals.

Grammars are plain data: a Grammar holds the productions, the terminal and
non-terminal symbols and the start symbol, and is usually put together with
a GrammarBuilder.  The grammar is augmented with a production S' ::= S,
which is always production 0.

Table generation follows the textbook construction (see Aho, Sethi and
Ullman, Compilers: Principles, Techniques, and Tools, section 4.7):

  1. FIRST sets for every symbol, by fixed point iteration.
  2. closure() and goto() over sets of LR(1) items.
  3. The canonical collection of item sets, built breadth first, with
     item sets of equal content merged into a single state.
  4. ACTION and GOTO tables projected from the collection.  Conflicting
     cells are reported, not resolved; the first action written wins.

No merging of states with equal cores is done, so the tables can be much
larger than LALR(1) tables for the same grammar, but they never contain the
reduce/reduce conflicts that LALR(1) merging can introduce.

Typical use:

  action, goto, report = build_tables(grammar)
  trace = parse((action, goto, report), grammar, ["id", "=", "id"])
  if trace.accepted: ...

The tables are read-only once built and can be shared between parses.
"""
from lrtable.errors import GrammarError, ConflictWarning, ParseError
from lrtable.grammar import Terminal, Nonterminal, Production, Grammar, \
    GrammarBuilder, EOI, epsilon
from lrtable.first import FirstSets
from lrtable.items import Item, ItemSet, ItemAlgebra
from lrtable.lr_automaton import Action, ACCEPT, ERROR, Collection, \
    ActionTable, GotoTable, Conflict, ConflictReport, ParseTables, \
    build_tables
from lrtable.driver import ACCEPTED, Step, ParseTrace, Lr, parse
