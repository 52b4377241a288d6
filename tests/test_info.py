import pytest

from nnstensors import TensorsInfo, TensorsSchema, TensorType, TensorInfo, TensorLimits
from nnstensors.exceptions import InvalidArgument, OutOfRange, SchemaMismatch


class TestTensorsInfoBuilder:
    def setup_method(self):
        self.info = TensorsInfo()

    def test_empty_info(self):
        assert self.info.get_tensor_count() == 0
        assert len(self.info) == 0
        assert self.info.total_byte_size() == 0

    def test_add_returns_index(self):
        assert self.info.add_tensor_info(TensorType.UINT8, [3, 224, 224, 1]) == 0
        assert self.info.add_tensor_info(TensorType.FLOAT32, [1, 1001]) == 1
        assert self.info.get_tensor_count() == 2

    def test_tensor_size(self):
        self.info.add_tensor_info(TensorType.UINT8, [3, 224, 224, 1])
        self.info.add_tensor_info("FLOAT32", [2, 5])

        assert self.info.get_tensor_size(0) == 150528
        assert self.info.get_tensor_size(1) == 40
        assert self.info.total_byte_size() == 150568

    def test_tensor_size_is_stable(self):
        self.info.add_tensor_info(TensorType.INT64, [4, 4])
        assert self.info.get_tensor_size(0) == self.info.get_tensor_size(0) == 128

    def test_accessors(self):
        self.info.add_tensor_info(TensorType.INT16, [2, 3], name="input")

        assert self.info.get_tensor_type(0) == TensorType.INT16
        assert self.info.get_tensor_shape(0) == (2, 3)
        assert self.info.get_tensor_name(0) == "input"
        assert self.info[0] == TensorInfo(TensorType.INT16, (2, 3))

        self.info.set_tensor_name(0, "renamed")
        assert self.info.get_tensor_name(0) == "renamed"

    def test_add_unknown_type_fails(self):
        with pytest.raises(InvalidArgument):
            self.info.add_tensor_info(TensorType.UNKNOWN, [1])
        assert self.info.get_tensor_count() == 0

    def test_add_invalid_shape_fails(self):
        with pytest.raises(InvalidArgument):
            self.info.add_tensor_info(TensorType.UINT8, [3, 0])

        with pytest.raises(InvalidArgument):
            self.info.add_tensor_info(TensorType.UINT8, [])

    def test_rank_limit(self):
        self.info.add_tensor_info(TensorType.UINT8, [1, 2, 3, 4])

        with pytest.raises(InvalidArgument, match="rank 5 exceeds"):
            self.info.add_tensor_info(TensorType.UINT8, [1, 2, 3, 4, 5])

    def test_count_limit(self):
        for _ in range(16):
            self.info.add_tensor_info(TensorType.UINT8, [1])

        with pytest.raises(InvalidArgument, match="more than 16"):
            self.info.add_tensor_info(TensorType.UINT8, [1])
        assert self.info.get_tensor_count() == 16

    def test_custom_limits(self):
        info = TensorsInfo(limits=TensorLimits(max_tensors=2, max_rank=6))
        info.add_tensor_info(TensorType.UINT8, [1, 1, 1, 1, 1, 2])
        info.add_tensor_info(TensorType.UINT8, [1])

        with pytest.raises(InvalidArgument):
            info.add_tensor_info(TensorType.UINT8, [1])

    @pytest.mark.parametrize("index", [1, 5, -1, "0", None, True])
    def test_index_out_of_range(self, index):
        self.info.add_tensor_info(TensorType.UINT8, [10])

        with pytest.raises(OutOfRange):
            self.info.get_tensor_size(index)

    def test_out_of_range_on_empty(self):
        with pytest.raises(OutOfRange) as exc_info:
            self.info.get_tensor_size(0)

        assert exc_info.value.count == 0
        assert isinstance(exc_info.value, IndexError)

    def test_replace_and_clear(self):
        self.info.add_tensor_info(TensorType.UINT8, [10])
        self.info.set_tensor_info(0, TensorType.FLOAT64, [10])
        assert self.info.get_tensor_size(0) == 80

        with pytest.raises(OutOfRange):
            self.info.set_tensor_info(1, TensorType.UINT8, [1])

        self.info.clear()
        assert self.info.get_tensor_count() == 0

    def test_copy_is_independent(self):
        self.info.add_tensor_info(TensorType.UINT8, [10])
        duplicate = self.info.copy()
        duplicate.add_tensor_info(TensorType.UINT8, [10])

        assert self.info.get_tensor_count() == 1
        assert duplicate.get_tensor_count() == 2


class TestTensorsInfoEquality:
    def test_reflexive_and_symmetric(self):
        a = TensorsInfo()
        a.add_tensor_info(TensorType.UINT8, [3, 224, 224])
        b = TensorsInfo()
        b.add_tensor_info(TensorType.UINT8, [3, 224, 224])

        assert a.equals(a)
        assert a.equals(b) and b.equals(a)
        assert a == b

    def test_count_sensitive(self):
        single = TensorsInfo()
        single.add_tensor_info(TensorType.UINT8, [3, 224, 224])
        double = TensorsInfo()
        double.add_tensor_info(TensorType.UINT8, [3, 224, 224])
        double.add_tensor_info(TensorType.UINT8, [3, 224, 224])

        assert not single.equals(double)
        assert single != double

    def test_order_sensitive(self):
        ab = TensorsInfo()
        ab.add_tensor_info(TensorType.UINT8, [3, 224, 224])
        ab.add_tensor_info(TensorType.FLOAT32, [1, 1001])
        ba = TensorsInfo()
        ba.add_tensor_info(TensorType.FLOAT32, [1, 1001])
        ba.add_tensor_info(TensorType.UINT8, [3, 224, 224])

        assert not ab.equals(ba)

    def test_type_and_shape_sensitive(self):
        a = TensorsInfo()
        a.add_tensor_info(TensorType.UINT8, [3, 224, 224])
        b = TensorsInfo()
        b.add_tensor_info(TensorType.INT8, [3, 224, 224])
        c = TensorsInfo()
        c.add_tensor_info(TensorType.UINT8, [3, 224, 224, 1])

        assert a != b
        assert a != c

    def test_not_equal_to_other_objects(self):
        info = TensorsInfo()
        assert not info.equals(None)
        assert info != [1, 2]

    def test_check_compatible(self):
        expected = TensorsInfo()
        expected.add_tensor_info(TensorType.UINT8, [4])
        expected.add_tensor_info(TensorType.FLOAT32, [2])
        actual = TensorsInfo()
        actual.add_tensor_info(TensorType.UINT8, [4])
        actual.add_tensor_info(TensorType.FLOAT64, [2])

        expected.check_compatible(expected.copy())

        with pytest.raises(SchemaMismatch) as exc_info:
            expected.check_compatible(actual)
        assert exc_info.value.index == 1

        with pytest.raises(SchemaMismatch, match="count differs"):
            expected.check_compatible(TensorsInfo())


class TestTensorsSchema:
    def setup_method(self):
        self.info = TensorsInfo()
        self.info.add_tensor_info(TensorType.UINT8, [3, 224, 224, 1], name="image")

    def test_freeze_snapshot(self):
        schema = self.info.freeze()
        self.info.set_tensor_info(0, TensorType.FLOAT32, [1])
        self.info.add_tensor_info(TensorType.UINT8, [1])

        assert schema.get_tensor_count() == 1
        assert schema.get_tensor_size(0) == 150528
        assert schema.get_tensor_name(0) == "image"

    def test_schema_equals_builder(self):
        schema = self.info.freeze()

        assert schema == self.info
        assert self.info == schema

    def test_schema_is_hashable(self):
        assert hash(self.info.freeze()) == hash(self.info.freeze())
        assert len({self.info.freeze(), self.info.freeze()}) == 1

    def test_builder_is_not_hashable(self):
        with pytest.raises(TypeError):
            hash(self.info)

    def test_to_builder(self):
        builder = self.info.freeze().to_builder()
        builder.add_tensor_info(TensorType.UINT8, [1])

        assert builder.get_tensor_count() == 2
        assert self.info.get_tensor_count() == 1

    def test_schema_enforces_limits(self):
        entries = [TensorInfo(TensorType.UINT8, (1,))] * 3

        with pytest.raises(InvalidArgument):
            TensorsSchema(entries, limits=TensorLimits(max_tensors=2))

        with pytest.raises(InvalidArgument):
            TensorsSchema([TensorInfo(TensorType.UINT8, (1, 1, 1, 1, 1))])
