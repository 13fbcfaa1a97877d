import json
import tempfile
import unittest
from pathlib import Path

from replan.engine import generate_replan
from replan.io import (
    block_from_dict,
    block_to_dict,
    blocks_from_obj,
    dumps_blocks,
    load_blocks,
    result_to_dict,
    write_result,
)
from replan.model import Category
from replan.validate import BlockValidationError, assert_valid_blocks, validate_blocks


def _raw(bid: str, start: str, dur: int, **kw) -> dict:
    out = {
        "id": bid,
        "title": f"Block {bid}",
        "type": "Deep",
        "startTime": start,
        "duration": dur,
        "fixed": False,
        "completed": False,
        "priority": 2,
    }
    out.update(kw)
    return out


DAY = [
    _raw("f", "09:00", 60, fixed=True, type="Social"),
    _raw("a", "09:30", 30, priority=1),
    _raw("b", "10:00", 30, protected=True, fallbackMinutes=20),
]


class TestValidateBlocksContract(unittest.TestCase):
    def test_valid_day_has_no_errors(self) -> None:
        self.assertEqual(validate_blocks(DAY), [])
        assert_valid_blocks(DAY)

    def test_collects_every_problem(self) -> None:
        bad = [
            _raw("x", "25:00", 0, priority=4, type="Nap"),
            _raw("x", "09:00", 30, fallbackMinutes=45),
            _raw("", "09:00", 30, fixed="yes"),
            "not-a-block",
        ]
        errs = validate_blocks(bad)
        joined = "\n".join(errs)

        self.assertIn("blocks[0].startTime must be HH:MM", joined)
        self.assertIn("blocks[0].duration must be positive int", joined)
        self.assertIn("blocks[0].priority must be 1, 2 or 3", joined)
        self.assertIn("blocks[0].type must be one of", joined)
        self.assertIn("blocks[1].id is duplicated: x", joined)
        self.assertIn("blocks[1].fallbackMinutes must not exceed duration", joined)
        self.assertIn("blocks[2].id must be non-empty string", joined)
        self.assertIn("blocks[2].fixed must be bool", joined)
        self.assertIn("blocks[3] must be an object", joined)

    def test_non_list_is_rejected(self) -> None:
        self.assertEqual(validate_blocks({"blocks": []}), ["blocks must be a list, got dict"])
        with self.assertRaises(BlockValidationError):
            assert_valid_blocks(None)

    def test_bool_duration_is_not_an_int(self) -> None:
        errs = validate_blocks([_raw("a", "09:00", True)])
        self.assertIn("blocks[0].duration must be positive int", errs)


class TestBlocksIoContract(unittest.TestCase):
    def test_block_dict_roundtrip_keeps_storage_shape(self) -> None:
        b = block_from_dict(DAY[2])
        self.assertEqual(b.start_min, 600)
        self.assertEqual(b.category, Category.DEEP)
        self.assertEqual(b.fallback_minutes, 20)
        self.assertTrue(b.protected)

        d = block_to_dict(b)
        self.assertEqual(d["startTime"], "10:00")
        self.assertEqual(d["fallbackMinutes"], 20)
        self.assertEqual({k: d[k] for k in DAY[2]}, DAY[2])

    def test_optional_fields_default(self) -> None:
        b = block_from_dict(DAY[1])
        self.assertIsNone(b.fallback_minutes)
        self.assertFalse(b.protected)
        self.assertNotIn("fallbackMinutes", block_to_dict(b))

    def test_blocks_from_obj_validates(self) -> None:
        with self.assertRaises(BlockValidationError):
            blocks_from_obj([_raw("a", "9am", 30)])

    def test_result_to_dict_shape(self) -> None:
        res = generate_replan(blocks_from_obj(DAY), "09:15")
        out = result_to_dict(res)

        self.assertEqual(set(out), {"blocks", "actions", "minutesBehind"})
        self.assertEqual(out["minutesBehind"], 15)
        self.assertEqual([b["startTime"] for b in out["blocks"]], ["09:00", "10:05", "10:40"])
        self.assertEqual(
            out["actions"][0],
            {"blockId": "a", "action": "moved", "originalStartTime": "09:30", "newStartTime": "10:05"},
        )

    def test_load_and_write_files(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            in_path = td / "blocks.json"
            in_path.write_text(json.dumps(DAY, indent=2) + "\n", encoding="utf-8")

            blocks = load_blocks(in_path)
            self.assertEqual([b.id for b in blocks], ["f", "a", "b"])

            out_path = write_result(td / "out" / "result.json", generate_replan(blocks, "09:15"))
            obj = json.loads(out_path.read_text(encoding="utf-8"))
            self.assertEqual(obj["minutesBehind"], 15)
            self.assertEqual(len(obj["blocks"]), 3)

            self.assertEqual(json.loads(dumps_blocks(blocks)), [block_to_dict(b) for b in blocks])

    def test_replan_file_and_needs_replan(self) -> None:
        from replan.api import needs_replan, replan_file

        with tempfile.TemporaryDirectory() as td:
            in_path = Path(td) / "blocks.json"
            in_path.write_text(json.dumps(DAY), encoding="utf-8")

            res = replan_file(in_path, "salvage-streak", "09:15")
            self.assertEqual(res.minutes_behind, 15)
            self.assertEqual(json.loads(in_path.read_text(encoding="utf-8")), DAY)

            blocks = load_blocks(in_path)
            self.assertTrue(needs_replan(blocks, "09:45"))
            self.assertFalse(needs_replan(blocks, "09:35"))

    def test_load_rejects_non_list_json(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "blocks.json"
            p.write_text('{"id": "a"}', encoding="utf-8")
            with self.assertRaises(ValueError):
                load_blocks(p)


if __name__ == "__main__":
    unittest.main(verbosity=2)
