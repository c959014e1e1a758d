"""Slurp, barf and raise; a failed edit leaves the buffer untouched."""

from llaves import Session

session = Session(r"\begin{prop} x\end{prop} y", point=13)
session.slurp_forward()
print("slurp_forward:", session.text)
session.barf_forward()
print("barf_forward: ", session.text)

session = Session(r"f(\left( a + b \right))", point=9)
session.raise_sexp()
print("raise_sexp:   ", session.text)

session = Session("(a)", point=2)
result = session.slurp_forward()
print("aborted:", result.status.name, "-", result.reason, "| text still", session.text)
