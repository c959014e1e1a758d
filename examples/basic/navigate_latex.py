"""Move over balanced LaTeX groups like a structural editor."""

from llaves import Session

source = r"x = \left( a + \bigl[ b \bigr] \right) + c"
session = Session(source, point=4)

result = session.forward_sexp()
print("forward_sexp:", result.status.name, "->", session.point)
print("jumped over:", repr(source[4 : session.point]))

session.point = source.index("b ")
print("enclosing group:", [t.text for t in session.enclosing_group()])

session.up_list(2)
print("after up_list(2):", session.point)

session.point = len(source) - 4
session.backward_sexp()
print("backward_sexp lands on:", repr(source[session.point : session.point + 6]))
