import sys

from argmatch import *


def main(argv):
    parser = Parser(shell=True)
    parser.add_positional("string", "characters to sort")
    parser.add_optional("--invert", Arity.FLAG, flag="-i", descr="sort in descending order")
    parser.add_optional("--repeat", Arity.SINGLE, flag="-r", descr="print the result this many times")
    parser.add_optional("--filter", Arity.APPEND, flag="-f", descr="drop this character (repeatable)")
    parser.parse(argv)

    removed = set(parser.args("filter", CHAR))
    string = sorted(
        (char for char in parser.arg("string") if char not in removed),
        reverse=parser.arg("invert", bool),
    )

    if repeat := parser.arg("repeat", UINT32, default=1):
        print("".join(string) * repeat)


if __name__ == '__main__':
    main(sys.argv)
