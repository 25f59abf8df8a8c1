import unittest

from otter_verify.params import (
    InputParams,
    OperationKind,
    create_ix_data,
    decode_params,
    encode_params,
    split_ix_data,
)


class ParamsEncodingTests(unittest.TestCase):
    def test_encode_matches_borsh_layout(self) -> None:
        params = InputParams(version="0.1.0", git_url="u", commit="", args=("a", "bc"))
        expected = (
            b"\x05\x00\x00\x000.1.0"
            b"\x01\x00\x00\x00u"
            b"\x00\x00\x00\x00"
            b"\x02\x00\x00\x00"
            b"\x01\x00\x00\x00a"
            b"\x02\x00\x00\x00bc"
        )
        self.assertEqual(encode_params(params), expected)

    def test_round_trip(self) -> None:
        params = InputParams(
            version="0.2.3",
            git_url="https://github.com/Ellipsis-Labs/phoenix-v1",
            commit="a3f0e3c9d1",
            args=("--library-name", "phoenix", "--", "--features", "ü"),
        )
        self.assertEqual(decode_params(encode_params(params)), params)

    def test_round_trip_empty_args(self) -> None:
        params = InputParams(version="", git_url="", commit="")
        self.assertEqual(params.args, ())
        self.assertEqual(decode_params(encode_params(params)), params)

    def test_args_list_is_frozen_to_tuple(self) -> None:
        params = InputParams(version="1", git_url="g", commit="c", args=["x", "y"])
        self.assertEqual(params.args, ("x", "y"))

    def test_rejects_non_string_fields(self) -> None:
        with self.assertRaisesRegex(ValueError, "commit must be a string"):
            InputParams(version="1", git_url="g", commit=None)  # type: ignore[arg-type]
        with self.assertRaisesRegex(ValueError, r"args\[1\] must be a string"):
            InputParams(version="1", git_url="g", commit="c", args=("a", 2))  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            InputParams(version="1", git_url="g", commit="c", args="abc")  # type: ignore[arg-type]

    def test_decode_rejects_truncated(self) -> None:
        data = encode_params(InputParams(version="1.0.0", git_url="g", commit="c"))
        with self.assertRaisesRegex(ValueError, "truncated"):
            decode_params(data[:-2])

    def test_decode_rejects_trailing_bytes(self) -> None:
        data = encode_params(InputParams(version="1.0.0", git_url="g", commit="c"))
        with self.assertRaisesRegex(ValueError, "trailing"):
            decode_params(data + b"\x00")


class InstructionDataTests(unittest.TestCase):
    def setUp(self) -> None:
        self.params = InputParams(version="0.1.0", git_url="https://x/y", commit="abc", args=("-a",))

    def test_discriminants(self) -> None:
        self.assertEqual(list(OperationKind.INITIALIZE.discriminant), [175, 175, 109, 31, 13, 152, 155, 237])
        self.assertEqual(list(OperationKind.UPDATE.discriminant), [219, 200, 88, 176, 158, 63, 253, 127])
        self.assertEqual(list(OperationKind.CLOSE.discriminant), [98, 165, 201, 177, 108, 65, 206, 96])

    def test_initialize_payload(self) -> None:
        data = create_ix_data(OperationKind.INITIALIZE, self.params)
        self.assertEqual(data[:8], OperationKind.INITIALIZE.discriminant)
        self.assertEqual(data[8:], encode_params(self.params))

    def test_update_requires_params(self) -> None:
        with self.assertRaisesRegex(ValueError, "update requires input params"):
            create_ix_data(OperationKind.UPDATE)

    def test_close_is_discriminant_only(self) -> None:
        self.assertEqual(create_ix_data(OperationKind.CLOSE, self.params), OperationKind.CLOSE.discriminant)

    def test_split_ix_data(self) -> None:
        kind, params = split_ix_data(create_ix_data(OperationKind.UPDATE, self.params))
        self.assertIs(kind, OperationKind.UPDATE)
        self.assertEqual(params, self.params)
        self.assertEqual(split_ix_data(OperationKind.CLOSE.discriminant), (OperationKind.CLOSE, None))

    def test_split_rejects_unknown_discriminant(self) -> None:
        with self.assertRaisesRegex(ValueError, "unknown instruction discriminant"):
            split_ix_data(b"\x00" * 8)


if __name__ == "__main__":
    unittest.main()
