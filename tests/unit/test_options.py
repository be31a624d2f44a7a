import pytest
from recordset.config.type_mapping import TypeMapping
from recordset.options import RecordsetOptions, iterrows_data_loader
from recordset.options import pandas_numpy_data_loader
from recordset.types import DecodeKind


def test_init_defaults():
    """Test default initialization"""
    options = RecordsetOptions()

    assert options.type_mapping is TypeMapping.get_instance()
    assert options.keep_nulls is False
    assert options.data_loader == iterrows_data_loader


def test_custom_options():
    mapping = TypeMapping()
    options = RecordsetOptions(
        type_mapping=mapping,
        keep_nulls=True,
        data_loader=pandas_numpy_data_loader,
    )

    assert options.type_mapping is mapping
    assert options.keep_nulls is True
    assert options.data_loader == pandas_numpy_data_loader


def test_type_mapping_overrides_do_not_leak():
    """Dict overrides apply to a copy of the shared mapping"""
    options = RecordsetOptions(type_mapping={'INT8': 'int64'})

    assert options.type_mapping.resolve('INT8') is DecodeKind.INT64
    assert options.type_mapping.resolve('VARCHAR') is DecodeKind.STRING
    assert TypeMapping.get_instance().resolve('INT8') is DecodeKind.RAW


def test_validation():
    """Test validation rules"""
    with pytest.raises(ValueError):
        RecordsetOptions(type_mapping=['INT8'])

    with pytest.raises(ValueError):
        RecordsetOptions(type_mapping={'INT8': 'integer128'})

    with pytest.raises(ValueError):
        RecordsetOptions(data_loader='pandas')


if __name__ == '__main__':
    __import__('pytest').main([__file__])
