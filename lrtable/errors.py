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
Exception and warning classes.

GrammarError is raised while a grammar is being constructed or, in strict
mode, when the parsing tables contain conflicts.  ConflictWarning is issued
once per conflicting ACTION cell.  ParseError is not an exception at all: a
parse that cannot continue is a normal outcome, so the driver stores a
ParseError in the trace instead of raising it.
"""

__all__ = ["GrammarError", "ConflictWarning", "ParseError"]


class GrammarError(Exception):
    pass


class ConflictWarning(UserWarning):
    pass


class ParseError(object):
    """
Terminal outcome of a failed parse.

reason : "unexpected token", "no goto entry" or "reduction cycle".
state : State on top of the stack when the failure was detected.
symbol : The lookahead terminal, or the reduced non-terminal when no goto
         entry exists.
production : Index of the production just reduced, if any.
"""
    UNEXPECTED_TOKEN = "unexpected token"
    NO_GOTO = "no goto entry"
    REDUCTION_CYCLE = "reduction cycle"

    def __init__(self, reason, state, symbol, production=None):
        self.reason = reason
        self.state = state
        self.symbol = symbol
        self.production = production

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return False
        return (self.reason, self.state, self.symbol, self.production) == \
            (other.reason, other.state, other.symbol, other.production)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.reason, self.state, self.symbol, self.production))

    def __repr__(self):
        if self.production is None:
            return "[error %s: state %d, %r]" % \
                (self.reason, self.state, self.symbol)
        return "[error %s: state %d, %r, production %d]" % \
            (self.reason, self.state, self.symbol, self.production)
