import lrtable

# Optional prefixes.
#
#   1: S ::= A B c.
#   2: A ::= a.
#   3: A ::= .
#   4: B ::= b.
#   5: B ::= .
grammar = lrtable.GrammarBuilder() \
    .terminal("a", "b", "c") \
    .nonterminal("S", "A", "B") \
    .production("S", "A", "B", "c") \
    .production("A", "a") \
    .production("A") \
    .production("B", "b") \
    .production("B") \
    .build()
