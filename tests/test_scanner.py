import base64
import unittest
import zlib

from bsm2edit.compression import Framing
from bsm2edit.errors import MalformedInputError, UnsupportedEncodingError
from bsm2edit.profiles import ENVIRONMENT_HINTS, WAVE_HINTS
from bsm2edit.scanner import MIN_PAYLOAD_LENGTH, scan, select_block


WAVE_TEXT = "\n".join([
    "CreateTrain(1)",
    "AddBloon(Red, 10, 0.5)",
    "FollowBezier(12, 40, 300, 220)",
    "AddBloon(Blue, 6, 0.75)",
    "AddWave(2)",
    "AddBloon(Green, 14, 0.4)",
    "FollowBezier(64, 18, 512, 96)",
    "AddBloon(Yellow, 3, 1.25)",
])

ENV_TEXT = "\n".join([
    "// Environment config",
    "var scrollSpeed:Number = 4;",
    "const debugMode = false;",
    "this.bgColor = 0x112233;",
    "lives = 3;",
    "let spawnPoints = [1, 2, 3];",
])


def encode(text: str, wbits: int = zlib.MAX_WBITS) -> str:
    co = zlib.compressobj(wbits=wbits)
    return base64.b64encode(co.compress(text.encode("utf-8")) + co.flush()).decode("ascii")


class ScannerTests(unittest.TestCase):

    def test_finds_exactly_the_long_runs(self):
        waves = encode(WAVE_TEXT)
        env = encode(ENV_TEXT, -zlib.MAX_WBITS)
        opaque = "A" * 80
        host = (
            'package levels {\n'
            '  var name = "SGVsbG8=";\n'
            f'  var waves = "{waves}";\n'
            "  var short = 'abc';\n"
            f"  var env = '{env}';\n"
            '  var empty = "";\n'
            f'  var blob = "{opaque}";\n'
            '}\n'
        )
        blocks = scan(host, WAVE_HINTS)
        self.assertEqual(len(blocks), 3)
        self.assertEqual([b.ordinal for b in blocks], [0, 1, 2])
        starts = [b.span_start for b in blocks]
        self.assertEqual(starts, sorted(set(starts)))
        self.assertEqual([b.quote_char for b in blocks], ['"', "'", '"'])
        for block in blocks:
            self.assertLess(block.span_start, block.span_end)
            self.assertEqual(host[block.span_start:block.span_end], block.raw_inner)
            self.assertEqual(host[block.span_start - 1], block.quote_char)
            self.assertEqual(host[block.span_end], block.quote_char)

        self.assertEqual(blocks[0].decoded_text, WAVE_TEXT)
        self.assertEqual(blocks[0].framing, Framing.ZLIB)
        self.assertTrue(blocks[0].classification)
        self.assertEqual(blocks[1].decoded_text, ENV_TEXT)
        self.assertEqual(blocks[1].framing, Framing.RAW)
        self.assertFalse(blocks[1].classification)
        self.assertFalse(blocks[2].decodable)
        self.assertIsInstance(blocks[2].error, UnsupportedEncodingError)

    def test_no_blocks(self):
        self.assertEqual(scan('var a = "hello"; var b = \'x\';'), [])

    def test_mismatched_quotes_are_not_a_block(self):
        payload = encode(WAVE_TEXT)
        self.assertEqual(scan(f'x = "{payload}\';'), [])

    def test_minimum_length_counts_only_base64_characters(self):
        host = '"' + "QUJD" * 15 + " " * 10 + "*" * 10 + '"'  # 60 alphabet chars
        self.assertEqual(scan(host), [])
        host = '"' + "QUJD" * 16 + '"'
        self.assertEqual(len(scan(host)), 1)
        self.assertEqual(len(scan('"' + "QUJD" * 4 + '"', min_length=16)), 1)

    def test_rejected_run_closing_quote_can_open_block(self):
        payload = encode(WAVE_TEXT)
        host = f'"ab"{payload}"'
        blocks = scan(host)
        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].span_start, 4)
        self.assertEqual(blocks[0].decoded_text, WAVE_TEXT)

    def test_masked_and_wrapped_block(self):
        payload = encode(WAVE_TEXT)
        raw = payload[:10] + "*" + payload[10:40] + "\n        " + payload[40:] + "*"
        host = f"data = '{raw}';\n"
        [block] = scan(host, WAVE_HINTS)
        self.assertEqual(block.raw_inner, raw)
        self.assertEqual(block.cleaned_encoded, payload)
        self.assertEqual(block.mask_positions, [10, len(payload)])
        self.assertEqual(block.decoded_text, WAVE_TEXT)

    def test_malformed_block_kept_with_error(self):
        host = '"' + "A" * 65 + '"' + ' "' + encode(WAVE_TEXT) + '"'
        blocks = scan(host)
        self.assertEqual(len(blocks), 2)
        self.assertIsInstance(blocks[0].error, MalformedInputError)
        self.assertIsNone(blocks[0].decoded_text)
        self.assertTrue(blocks[1].decodable)

    def test_classification_uses_hints(self):
        host = f'"{encode(ENV_TEXT)}"'
        self.assertTrue(scan(host, ENVIRONMENT_HINTS)[0].classification)
        self.assertFalse(scan(host, WAVE_HINTS)[0].classification)
        self.assertFalse(scan(host)[0].classification)

    def test_default_minimum(self):
        self.assertEqual(MIN_PAYLOAD_LENGTH, 64)


class SelectBlockTests(unittest.TestCase):

    def _host(self, *payloads):
        return "\n".join(f'p{i} = "{p}";' for i, p in enumerate(payloads))

    def test_prefers_classified_block(self):
        host = self._host("A" * 80, encode(ENV_TEXT), encode(WAVE_TEXT))
        blocks = scan(host, WAVE_HINTS)
        self.assertEqual(select_block(blocks).ordinal, 2)

    def test_falls_back_to_first_decodable(self):
        host = self._host("A" * 80, encode(ENV_TEXT), encode(WAVE_TEXT))
        blocks = scan(host, ("NoSuchHint",))
        self.assertEqual(select_block(blocks).ordinal, 1)

    def test_none_decodable(self):
        blocks = scan(self._host("A" * 80, "A" * 64))
        self.assertEqual(len(blocks), 2)
        self.assertIsNone(select_block(blocks))

    def test_empty(self):
        self.assertIsNone(select_block([]))


if __name__ == "__main__":
    unittest.main()
