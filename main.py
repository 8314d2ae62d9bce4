from rich.pretty import pprint

from argosy import *

spec = ArgumentSpec("example-1", "The first example program!", "Bottom text", "Someone 2023")
spec.add_option("f", "foo", "0", "Some help!")
spec.add_option("-", "no-help", "2")
spec.add_arg("BAR", "1", "A positional")
spec.add_exit_status(0, "Everything went just fine")
spec.add_exit_status(1, "Something went wrong")


if __name__ == '__main__':
    pprint(spec.parse_args(colorful=True))
