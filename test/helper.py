"""
Help renderer tests.

Scope
- format_help: exact layout of every section, omission of empty sections.
- Arity annotations for positionals and options, [OPTIONS] in the usage line.
- render_help: styling never changes the characters; repeated renders agree.

Conventions
- Test method names follow CamelCase per project convention.
- Expected screens are spelled out line by line.
"""
import unittest
from unittest import TestCase, mock

from rich.text import Text

from argosy import ArgumentSpec, format_help, render_help


def example():
    spec = ArgumentSpec("example-1", "The first example program!", "Bottom text", "Someone 2023")
    spec.add_option("f", "foo", "0", "Some help!")
    spec.add_option("-", "no-help", "2")
    spec.add_arg("BAR", "1", "A positional")
    spec.add_exit_status(0, "Everything went just fine")
    spec.add_exit_status(1, "Something went wrong")
    return spec


class TestFormatHelp(TestCase):

    def testExampleProgram(self):
        self.assertEqual(format_help(example()), "\n".join([
            "Usage: example-1 BAR [OPTIONS]",
            "The first example program!",
            "",
            "Positional Arguments:",
            "    BAR  A positional",
            "",
            "Options:",
            "    -f  --foo        Some help!",
            "        --no-help*2",
            "    -h  --help       Use this to print this help message",
            "",
            "Exit Statuses:",
            "    0  Everything went just fine",
            "    1  Something went wrong",
            "",
            "Bottom text",
            "Someone 2023",
        ]))

    def testMethodMatchesFunction(self):
        spec = example()
        self.assertEqual(spec.format_help(), format_help(spec))

    def testRepeatedInvocationsAreIdentical(self):
        spec = example()
        self.assertEqual(format_help(spec), format_help(spec))
        self.assertEqual(render_help(spec), render_help(spec))

    def testBareProgram(self):
        self.assertEqual(format_help(ArgumentSpec("tool")), "\n".join([
            "Usage: tool",
            "",
            "Options:",
            "    -h  --help  Use this to print this help message",
        ]))

    def testPositionalAnnotations(self):
        spec = ArgumentSpec("tool")
        spec.add_arg("ONE", "1")
        spec.add_arg("PAIR", "2")
        spec.add_arg("NONE", "0")
        spec.add_arg("FILES", "+")
        self.assertEqual(format_help(spec), "\n".join([
            "Usage: tool ONE PAIR*2 NONE*0 FILES*∞",
            "",
            "Positional Arguments:",
            "    ONE",
            "    PAIR*2",
            "    NONE*0",
            "    FILES*∞",
            "",
            "Options:",
            "    -h  --help  Use this to print this help message",
        ]))

    def testOptionAnnotations(self):
        spec = ArgumentSpec("tool")
        spec.add_option("i", "include", "+", "Paths to include")
        spec.add_option("o", "out", "1", "Output file")
        spec.add_option("q", "", "2", "Quiet twice")
        self.assertEqual(format_help(spec), "\n".join([
            "Usage: tool [OPTIONS]",
            "",
            "Options:",
            "    -i    --include*∞  Paths to include",
            "    -o    --out        Output file",
            "    -q*2               Quiet twice",
            "    -h    --help       Use this to print this help message",
        ]))

    def testCallerHelpReplacesImplicitHelp(self):
        spec = ArgumentSpec("tool", "Does things.")
        spec.add_option("-", "help", "0", "Show the manual")
        self.assertEqual(format_help(spec), "\n".join([
            "Usage: tool [OPTIONS]",
            "Does things.",
            "",
            "Options:",
            "    --help  Show the manual",
        ]))

    def testCallerShortHNarrowsHelpRow(self):
        spec = ArgumentSpec("tool")
        spec.add_option("h", "host", "1", "Server")
        self.assertEqual(format_help(spec), "\n".join([
            "Usage: tool [OPTIONS]",
            "",
            "Options:",
            "    -h  --host  Server",
            "        --help  Use this to print this help message",
        ]))

    def testFooterWithoutEpilog(self):
        spec = ArgumentSpec("tool", credits="Someone 2023")
        self.assertTrue(format_help(spec).endswith("message\n\nSomeone 2023"))


class TestRenderHelp(TestCase):

    def testRenderHelpReturnsText(self):
        self.assertIsInstance(render_help(example()), Text)

    def testPlainRenderHasNoStyles(self):
        text = render_help(example())
        self.assertFalse([span for span in text.spans if span.style])

    def testColorfulRenderKeepsCharacters(self):
        spec = example()
        colorful = render_help(spec, colorful=True)
        self.assertEqual(colorful.plain, format_help(spec))
        self.assertTrue(colorful.spans)

    def testHostStylesOverridePalette(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__styles__", {"program-name": "bold red"}, create=True):
            text = render_help(example(), colorful=True)
        self.assertIn("bold red", [str(span.style) for span in text.spans])


if __name__ == '__main__':
    unittest.main()
