import os
import shutil
import sys
import tempfile
import unittest
from io import StringIO
from unittest.mock import ANY, patch

from deepl_cli import cli
from deepl_cli.deepl_lib.models import Usage
from deepl_cli.deepl_lib.exceptions import SettingsError
from deepl_cli.deepl_lib.options import TranslationOptions
from deepl_cli.version_info import collect_version_info


class TestInsertDefaultCommand(unittest.TestCase):
    """Tests that `translate` is assumed when no command is named."""

    def test_inserted_before_input_file(self):
        self.assertEqual(cli._insert_default_command(["file.txt"]), ["translate", "file.txt"])

    def test_inserted_after_global_options(self):
        argv = ["-s", "EN", "--target_lang=JA", "--pro", "-dd", "file.txt"]
        self.assertEqual(cli._insert_default_command(argv), argv[:5] + ["translate", "file.txt"])

    def test_inserted_before_translate_options(self):
        self.assertEqual(
            cli._insert_default_command(["--tag_handling", "xml", "file.txt"]),
            ["translate", "--tag_handling", "xml", "file.txt"],
        )

    def test_inserted_when_empty(self):
        self.assertEqual(cli._insert_default_command([]), ["translate"])

    def test_explicit_commands_are_kept(self):
        for argv in (["usage"], ["--pro", "languages", "--type", "target"], ["trans", "f"], ["--version"], ["-h"]):
            self.assertEqual(cli._insert_default_command(argv), argv)

    def test_attached_short_values_before_command(self):
        for argv in (["-sEN", "-tJA", "usage"], ["-s=EN", "-t=JA", "usage"], ["-qsEN", "-t", "JA", "usage"]):
            self.assertEqual(cli._insert_default_command(argv), argv)

    def test_attached_short_values_before_input_file(self):
        self.assertEqual(
            cli._insert_default_command(["-sEN", "-tJA", "f.txt"]),
            ["-sEN", "-tJA", "translate", "f.txt"],
        )

    def test_combined_short_flags(self):
        self.assertEqual(cli._insert_default_command(["-qd", "f.txt"]), ["-qd", "translate", "f.txt"])
        self.assertEqual(cli._insert_default_command(["-dq", "usage"]), ["-dq", "usage"])

    def test_missing_option_value_is_left_to_argparse(self):
        self.assertEqual(cli._insert_default_command(["-s"]), ["-s"])

    def test_rewritten_arguments_parse(self):
        parser = cli.build_parser(collect_version_info())
        args = parser.parse_args(cli._insert_default_command(["-sEN", "-tJA", "usage"]))
        self.assertEqual((args.source_lang, args.target_lang, args.command), ("EN", "JA", "usage"))

        args = parser.parse_args(cli._insert_default_command(["-qd", "f.txt"]))
        self.assertTrue(args.quiet)
        self.assertEqual(args.debug, 1)
        self.assertEqual(args.input_file, "f.txt")


@patch.dict(os.environ, {"DEEPL_TOKEN": "test-key"})
class TestCommandLineInterface(unittest.TestCase):

    def setUp(self):
        """Set up a temporary directory for tests."""
        self.test_dir = tempfile.mkdtemp()
        self.input_file = os.path.join(self.test_dir, "input.txt")
        self.settings_file = os.path.join(self.test_dir, "setting.json")
        with open(self.input_file, "w", encoding="utf-8") as f:
            f.write("Hello")

    def tearDown(self):
        """Clean up the temporary directory."""
        shutil.rmtree(self.test_dir)

    @patch('deepl_cli.cli.cc.print_translation')
    @patch('deepl_cli.cli.DeepLClient')
    def test_cli_translate_file(self, mock_client_cls, mock_print_translation):
        """Tests that a file is translated with the options given on the command line."""
        mock_client_cls.return_value.translate.return_value = ["Hola", " mundo"]

        cli.main(["-s", "EN", "-t", "ES", "--quiet", "trans", "--tag_handling", "xml", self.input_file])

        mock_client_cls.assert_called_once_with("test-key", pro=False, debug=0)
        mock_client_cls.return_value.translate.assert_called_once_with("Hello", ANY)
        options = mock_client_cls.return_value.translate.call_args[0][1]
        self.assertIsInstance(options, TranslationOptions)
        self.assertEqual(options.source_lang, "EN")
        self.assertEqual(options.target_lang, "ES")
        self.assertEqual(options.tag_handling, "xml")
        self.assertIsNone(options.split_sentences)
        mock_print_translation.assert_called_once_with("Hola mundo", quiet=True)

    @patch('deepl_cli.cli.cc.print_translation')
    @patch('deepl_cli.cli.DeepLClient')
    def test_cli_translate_is_default_command(self, mock_client_cls, mock_print_translation):
        mock_client_cls.return_value.translate.return_value = ["Hallo"]
        cli.main(["-q", "-s", "EN", "-t", "DE", "--pro", self.input_file])
        mock_client_cls.assert_called_once_with("test-key", pro=True, debug=0)
        mock_print_translation.assert_called_once_with("Hallo", quiet=True)

    @patch('deepl_cli.cli.cc.print_translation')
    @patch('deepl_cli.cli.DeepLClient')
    @patch('sys.stdin', new_callable=StringIO)
    def test_cli_translate_reads_piped_stdin(self, mock_stdin, mock_client_cls, mock_print_translation):
        mock_stdin.write("From a pipe\n")
        mock_stdin.seek(0)
        mock_client_cls.return_value.translate.return_value = ["Depuis un tube\n"]
        cli.main(["-q", "-s", "EN", "-t", "FR"])
        mock_client_cls.return_value.translate.assert_called_once_with("From a pipe\n", ANY)

    @patch('deepl_cli.cli.cc.print_translation')
    @patch('deepl_cli.cli.DeepLClient')
    def test_cli_uses_settings_file_languages(self, mock_client_cls, mock_print_translation):
        with open(self.settings_file, "w") as f:
            f.write('{"source_lang": "JA", "target_lang": "EN", "split_sentences": "nonewlines", "debug": 1}')
        mock_client_cls.return_value.translate.return_value = ["ok"]

        with patch('sys.stderr', new_callable=StringIO):
            cli.main(["-q", "--settings-file", self.settings_file, self.input_file])

        options = mock_client_cls.return_value.translate.call_args[0][1]
        self.assertEqual((options.source_lang, options.target_lang), ("JA", "EN"))
        self.assertEqual(options.split_sentences, "nonewlines")
        self.assertEqual(options.debug, 1)

    @patch('deepl_cli.deepl_lib.client.api_call')
    @patch('sys.stdin', new_callable=StringIO)
    @patch('sys.stderr', new_callable=StringIO)
    def test_cli_empty_input_sends_no_request(self, mock_stderr, mock_stdin, mock_api_call):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["-q", "-s", "EN", "-t", "JA"])
        self.assertEqual(ctx.exception.code, 1)
        mock_api_call.assert_not_called()
        self.assertIn("no text to translate", mock_stderr.getvalue())

    @patch('deepl_cli.cli.cc.print_result')
    @patch('deepl_cli.cli.DeepLClient')
    def test_cli_usage(self, mock_client_cls, mock_print_result):
        mock_client_cls.return_value.usage.return_value = Usage(1, 2, 3, 4, 5, 6)
        cli.main(["usage"])
        mock_print_result.assert_called_once()
        self.assertTrue(mock_print_result.call_args[0][0].startswith("Character Count: 1;"))

    @patch('deepl_cli.cli.cc.print_result')
    @patch('deepl_cli.cli.DeepLClient')
    def test_cli_usage_after_attached_languages(self, mock_client_cls, mock_print_result):
        mock_client_cls.return_value.usage.return_value = Usage()
        cli.main(["-sEN", "-tJA", "usage"])
        mock_client_cls.return_value.usage.assert_called_once_with()

    @patch('deepl_cli.cli.cc.print_success')
    @patch('deepl_cli.cli.cc.print_translation')
    @patch('deepl_cli.cli.DeepLClient')
    def test_cli_reports_success(self, mock_client_cls, mock_print_translation, mock_print_success):
        mock_client_cls.return_value.translate.return_value = ["Hallo"]
        with patch('sys.stderr', new_callable=StringIO):
            cli.main(["-s", "EN", "-t", "DE", self.input_file])
        mock_print_success.assert_called_once_with("Translation complete.", quiet=False)

    @patch('deepl_cli.cli.cc.print_warning')
    @patch('deepl_cli.cli.cc.print_translation')
    @patch('deepl_cli.cli.DeepLClient')
    def test_cli_warns_on_empty_result(self, mock_client_cls, mock_print_translation, mock_print_warning):
        mock_client_cls.return_value.translate.return_value = []
        cli.main(["-q", "-s", "EN", "-t", "DE", self.input_file])
        mock_print_warning.assert_called_once_with("The service returned no translations.", quiet=True)
        mock_print_translation.assert_not_called()

    @patch('deepl_cli.cli.cc.print_result')
    @patch('deepl_cli.cli.DeepLClient')
    def test_cli_languages_type(self, mock_client_cls, mock_print_result):
        cli.main(["languages", "--type", "target"])
        mock_client_cls.return_value.languages.assert_called_once_with("target")

    @patch('deepl_cli.cli.cc.print_result')
    @patch('deepl_cli.cli.DeepLClient')
    def test_cli_glossary_language_pairs(self, mock_client_cls, mock_print_result):
        cli.main(["--pro", "glossary-language-pairs"])
        mock_client_cls.assert_called_once_with("test-key", pro=True, debug=0)
        mock_client_cls.return_value.glossary_language_pairs.assert_called_once_with()

    @patch('sys.stdout', new_callable=StringIO)
    def test_cli_version_flag(self, mock_stdout):
        """Tests that the --version flag prints the version and exits."""
        with self.assertRaises(SystemExit):
            cli.main(["--version"])
        self.assertIn("deepl-translate-cli", mock_stdout.getvalue())
        self.assertIn("rev", mock_stdout.getvalue())

    @patch('sys.stderr', new_callable=StringIO)
    def test_cli_missing_token(self, mock_stderr):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["usage"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("DEEPL_TOKEN", mock_stderr.getvalue())

    @patch('sys.stderr', new_callable=StringIO)
    def test_cli_argument_validation_errors(self, mock_stderr):
        """Tests that the CLI exits on invalid arguments."""
        with self.assertRaises(SystemExit):
            cli.main(["-s", "EN", "-t", "JA", os.path.join(self.test_dir, "missing.txt")])
        self.assertIn("Input file does not exist", mock_stderr.getvalue())

        with self.assertRaises(SystemExit):
            cli.main(["trans", "--tag_handling", "markdown", self.input_file])

    def test_invalid_debug_level_is_chained(self):
        args = cli.build_parser(collect_version_info()).parse_args(["translate"])
        with self.assertRaises(SettingsError) as ctx:
            cli._debug_level(args, {"debug": "loud"})
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    @patch('sys.stderr', new_callable=StringIO)
    def test_cli_identical_languages(self, mock_stderr):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["-s", "EN", "-t", "EN", self.input_file])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("identical", mock_stderr.getvalue())

if __name__ == '__main__':
    unittest.main()
