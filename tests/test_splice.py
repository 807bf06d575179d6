import base64
import unittest
import zlib

from bsm2edit.compression import decode_payload
from bsm2edit.errors import NoActiveBlockError
from bsm2edit.mask import strip
from bsm2edit.profiles import WAVE_HINTS
from bsm2edit.scanner import scan
from bsm2edit.splice import encode_block, export_name, splice


WAVE_TEXT = "\n".join([
    "CreateTrain(1)",
    "AddBloon(Red, 10, 0.5)",
    "FollowBezier(12, 40, 300, 220)",
    "AddWave(2)",
    "AddBloon(Blue, 6, 0.75)",
    "FollowBezier(64, 18, 512, 96)",
])


def encode(text: str, wbits: int = zlib.MAX_WBITS) -> str:
    co = zlib.compressobj(wbits=wbits)
    return base64.b64encode(co.compress(text.encode("utf-8")) + co.flush()).decode("ascii")


def masked_host(wbits: int = zlib.MAX_WBITS):
    payload = encode(WAVE_TEXT, wbits)
    raw = "*" + payload[:20] + "*" + payload[20:]
    host = f"// header\nvar level = 'x';\nvar waves = '{raw}';\n// trailer\n"
    return host, raw


class EncodeBlockTests(unittest.TestCase):

    def test_unchanged_text_reuses_original_inner(self):
        host, raw = masked_host(-zlib.MAX_WBITS)
        [block] = scan(host, WAVE_HINTS)
        self.assertEqual(encode_block(WAVE_TEXT, block), raw)
        self.assertEqual(splice(host, block, encode_block(WAVE_TEXT, block)), host)

    def test_changed_text_is_reencoded_with_mask(self):
        host, _ = masked_host()
        [block] = scan(host, WAVE_HINTS)
        edited = WAVE_TEXT.replace("Red, 10", "Red, 25")
        new_inner = encode_block(edited, block)
        cleaned, positions = strip(new_inner)
        self.assertEqual(positions, [0, 20])
        self.assertEqual(decode_payload(cleaned)[1], edited)

    def test_shorter_content_drops_out_of_range_markers(self):
        payload = encode(WAVE_TEXT)
        raw = payload + "*"
        [block] = scan(f'"{raw}"')
        new_inner = encode_block("AddWave(1)", block)
        cleaned, positions = strip(new_inner)
        self.assertLess(len(cleaned), len(payload))
        self.assertEqual(positions, [])
        self.assertEqual(decode_payload(cleaned)[1], "AddWave(1)")


class SpliceTests(unittest.TestCase):

    def test_bytes_outside_span_untouched(self):
        host, raw = masked_host()
        [block] = scan(host, WAVE_HINTS)
        result = splice(host, block, "NEWCONTENT")
        self.assertEqual(result[:block.span_start], host[:block.span_start])
        self.assertEqual(result[block.span_start:block.span_start + 10], "NEWCONTENT")
        self.assertEqual(result[block.span_start + 10:], host[block.span_end:])
        self.assertEqual(len(result), len(host) - len(raw) + 10)

    def test_identity_with_original_inner(self):
        host, raw = masked_host()
        [block] = scan(host, WAVE_HINTS)
        self.assertEqual(splice(host, block, raw), host)

    def test_no_active_block(self):
        with self.assertRaises(NoActiveBlockError):
            splice("text", None, "x")


class ExportNameTests(unittest.TestCase):

    def test_names(self):
        cases = [
            (("level.as",), "level_edited.as"),
            (("Level.AS",), "Level_edited.as"),
            (("dir.v2/level.as",), "dir.v2/level_edited.as"),
            (("level.txt",), "level.txt_edited.as"),
            (("level",), "level_edited.as"),
            (("",), "waves_edited.as"),
            (("level.as", "_env_edited"), "level_env_edited.as"),
        ]
        for args, expected in cases:
            with self.subTest(args=args):
                self.assertEqual(export_name(*args), expected)

    def test_default_stem(self):
        self.assertEqual(export_name("", "_env_edited", default_stem="environment"),
                         "environment_env_edited.as")

    def test_never_equal_to_input(self):
        for name in ("level.as", "a.as", "level_edited.as", "x"):
            self.assertNotEqual(export_name(name), name)

    def test_empty_suffix_rejected(self):
        with self.assertRaises(ValueError):
            export_name("level.as", "")


if __name__ == "__main__":
    unittest.main()
