import unittest
import warnings
import lrtable
from lrtable import Action, ACCEPT, ERROR, ParseError


class TestDriver(unittest.TestCase):
    def assertStacks(self, trace):
        for step in trace:
            self.assertEqual(len(step.stateStack), len(step.symbolStack) + 1)
            self.assertEqual(step.stateStack[0], 0)
        for step in trace[:-1]:
            self.assertIsNone(step.outcome)
        self.assertIsNotNone(trace[-1].outcome)

    def test_accept(self):
        from lrtable.tests.grammars import assign
        grammar = assign.grammar
        tables = lrtable.build_tables(grammar)

        trace = lrtable.parse(tables, grammar, ["id", "=", "*", "id", "$"])
        self.assertStacks(trace)
        self.assertEqual(len(trace), 11)
        self.assertTrue(trace.accepted)
        self.assertIsNone(trace.error)
        self.assertEqual(trace.outcome, lrtable.ACCEPTED)
        kinds = [action.kind for action in trace.actions()]
        self.assertEqual(kinds, [
            Action.SHIFT,   # id
            Action.REDUCE,  # L ::= id
            Action.SHIFT,   # =
            Action.SHIFT,   # *
            Action.SHIFT,   # id
            Action.REDUCE,  # L ::= id
            Action.REDUCE,  # R ::= L
            Action.REDUCE,  # L ::= * R
            Action.REDUCE,  # R ::= L
            Action.REDUCE,  # S ::= L = R
            Action.ACCEPT,
        ])
        self.assertEqual(trace.reductions(), [4, 4, 5, 3, 5, 1])

        first = trace[0]
        self.assertEqual(first.stateStack, (0,))
        self.assertEqual(first.symbolStack, ())
        self.assertEqual(first.remaining, ("id", "=", "*", "id", "$"))
        last = trace[-1]
        self.assertEqual(last.symbolStack, ("S",))
        self.assertEqual(last.remaining, ("$",))
        self.assertEqual(last.action, ACCEPT)

    def test_end_marker_appended(self):
        from lrtable.tests.grammars import assign
        grammar = assign.grammar
        tables = lrtable.ParseTables(grammar)

        explicit = lrtable.parse(tables, grammar, ["id", "=", "*", "id", "$"])
        implicit = lrtable.parse(tables, grammar, ["id", "=", "*", "id"])
        self.assertEqual(list(explicit), list(implicit))
        self.assertEqual(implicit[0].remaining[-1], "$")

    def test_reject(self):
        from lrtable.tests.grammars import assign
        grammar = assign.grammar
        parser = lrtable.Lr(lrtable.ParseTables(grammar))

        trace = parser.parse(["id", "=", "id", "*", "id", "$"])
        self.assertStacks(trace)
        self.assertFalse(trace.accepted)
        self.assertEqual(len(trace), 5)
        self.assertEqual(trace[-1].action, ERROR)
        error = trace.error
        self.assertEqual(error.reason, ParseError.UNEXPECTED_TOKEN)
        self.assertEqual(error.symbol, "*")
        self.assertEqual(error.state, trace[-1].stateStack[-1])
        self.assertIsNone(error.production)
        self.assertEqual(trace[-1].remaining, ("*", "id", "$"))

    def test_reject_unknown_token(self):
        from lrtable.tests.grammars import assign
        grammar = assign.grammar
        tables = lrtable.build_tables(grammar)

        trace = lrtable.parse(tables, grammar, ["id", "+", "id"])
        self.assertEqual(trace.error,
                         ParseError(ParseError.UNEXPECTED_TOKEN, 5, "+"))

    def test_reject_empty(self):
        from lrtable.tests.grammars import assign
        grammar = assign.grammar
        tables = lrtable.build_tables(grammar)

        trace = lrtable.parse(tables, grammar, [])
        self.assertEqual(len(trace), 1)
        self.assertEqual(trace.error,
                         ParseError(ParseError.UNEXPECTED_TOKEN, 0, "$"))

    def test_reject_early_end_marker(self):
        from lrtable.tests.grammars import assign
        grammar = assign.grammar
        tables = lrtable.build_tables(grammar)

        trace = lrtable.parse(tables, grammar, ["id", "$", "=", "id"])
        self.assertStacks(trace)
        self.assertFalse(trace.accepted)
        self.assertEqual(len(trace), 2)
        self.assertEqual(trace[-1].action, ERROR)
        self.assertEqual(trace.error,
                         ParseError(ParseError.UNEXPECTED_TOKEN, 5, "$"))
        self.assertEqual(trace[-1].remaining, ("$", "=", "id", "$"))

    def test_expr(self):
        from lrtable.tests.grammars import expr
        grammar = expr.grammar
        parser = lrtable.Lr(lrtable.ParseTables(grammar))

        trace = parser.parse("id + id * id".split())
        self.assertStacks(trace)
        self.assertTrue(trace.accepted)
        self.assertEqual(trace.reductions(), [6, 4, 2, 6, 4, 6, 3, 1])

        trace = parser.parse("( id + id ) * id".split())
        self.assertTrue(trace.accepted)

        for text in ["id +", "( id", ")", "id id", "* id"]:
            trace = parser.parse(text.split())
            self.assertStacks(trace)
            self.assertFalse(trace.accepted, text)
            self.assertEqual(trace.error.reason, ParseError.UNEXPECTED_TOKEN)

    def test_nullable(self):
        from lrtable.tests.grammars import nullable
        grammar = nullable.grammar
        parser = lrtable.Lr(lrtable.ParseTables(grammar))

        trace = parser.parse(["c"])
        self.assertStacks(trace)
        self.assertTrue(trace.accepted)
        self.assertEqual(len(trace), 5)
        self.assertEqual(trace.reductions(), [3, 5, 1])

        for tokens in (["a", "c"], ["b", "c"], ["a", "b", "c"]):
            self.assertTrue(parser.parse(tokens).accepted, tokens)
        for tokens in (["a", "a", "c"], ["b", "a", "c"], ["a", "b"]):
            self.assertFalse(parser.parse(tokens).accepted, tokens)

    def test_nullable_start(self):
        # L ::= L x | <e>, so the empty input is a sentence.
        grammar = lrtable.GrammarBuilder() \
            .terminal("x") \
            .nonterminal("L") \
            .production("L", "L", "x") \
            .production("L") \
            .build()
        parser = lrtable.Lr(lrtable.ParseTables(grammar))

        trace = parser.parse([])
        self.assertTrue(trace.accepted)
        self.assertEqual(trace.reductions(), [2])
        trace = parser.parse(["x", "x", "x"])
        self.assertStacks(trace)
        self.assertTrue(trace.accepted)
        self.assertEqual(trace.reductions(), [2, 1, 1, 1])

    def test_conflicting_tables(self):
        from lrtable.tests.grammars import dangling
        grammar = dangling.grammar
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", lrtable.ConflictWarning)
            tables = lrtable.build_tables(grammar)

        # The shift was kept, so e binds to the nearest i.
        trace = lrtable.parse(tables, grammar, "i i a e a".split())
        self.assertStacks(trace)
        self.assertTrue(trace.accepted)
        self.assertEqual(trace.reductions(), [3, 3, 1, 2])

    def test_no_goto(self):
        from lrtable.tests.grammars import rr
        grammar = rr.grammar
        action = lrtable.ActionTable({
            (0, "x"): Action.shift(1),
            (1, "$"): Action.reduce(3),
        })
        goto = lrtable.GotoTable()

        trace = lrtable.parse((action, goto, lrtable.ConflictReport()),
                              grammar, ["x"])
        self.assertEqual(len(trace), 2)
        self.assertFalse(trace.accepted)
        self.assertEqual(trace[-1].action, Action.reduce(3))
        self.assertEqual(trace.error,
                         ParseError(ParseError.NO_GOTO, 0, "A", 3))

    def test_reduction_cycle(self):
        # A and B derive each other; S ::= A loses the reduce/reduce
        # conflict to B ::= A, so the driver keeps going round.
        grammar = lrtable.GrammarBuilder() \
            .terminal("a") \
            .nonterminal("S", "A", "B") \
            .production("B", "A") \
            .production("S", "A") \
            .production("A", "B") \
            .production("A", "a") \
            .start("S") \
            .build()
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", lrtable.ConflictWarning)
            tables = lrtable.ParseTables(grammar)
        self.assertTrue(tables.hasConflicts)

        trace = lrtable.parse(tables, grammar, ["a"])
        self.assertStacks(trace)
        self.assertFalse(trace.accepted)
        self.assertEqual(len(trace), 5)
        self.assertEqual(trace.reductions(), [4, 1, 3, 1])
        error = trace.error
        self.assertEqual(error.reason, ParseError.REDUCTION_CYCLE)
        self.assertEqual(error.symbol, "$")
        self.assertEqual(error.production, 1)
        self.assertEqual(error.state, trace[-1].stateStack[-1])

    def test_shared_tables(self):
        from lrtable.tests.grammars import assign
        grammar = assign.grammar
        tables = lrtable.ParseTables(grammar)
        a = lrtable.Lr(tables)
        b = lrtable.Lr(tables, grammar)

        first = a.parse(["*", "id"])
        b.parse(["id", "=", "id", "*"])
        second = a.parse(["*", "id"])
        self.assertEqual(list(first), list(second))
        self.assertTrue(second.accepted)


if __name__ == '__main__':
    unittest.main()
