import pytest

from assoc.config.decorator import config_setting, resolve_setting
from assoc.config.validation import bind_config_values
from assoc.config.registry import all_registered


def test_decorator_registers_property_and_requires_return_annotation():
    class C:  # pyright: ignore[reportUnusedClass]
        @config_setting
        def value(self) -> int: ...

    regs = all_registered()
    assert any(r.collection_name == 'C' and r.key == 'value' for r in regs)

    # Missing return annotation only warns at decoration time
    with pytest.warns(RuntimeWarning):

        class D:  # pyright: ignore[reportUnusedClass]
            @config_setting
            def missing(self): ...


def test_property_reads_from_bound_config():  # type: ignore
    class E:
        @config_setting
        def value(self) -> int: ...

    class F:
        @config_setting
        def value(self) -> int: ...

    bind_config_values(**{'value': 0, 'E': {'value': 123}})
    e = E()
    f = F()
    assert e.value == 123
    assert f.value == 0

    # Explicit name override
    class G:
        @config_setting(name='my_name')
        def value(self) -> int: ...

    bind_config_values(my_name=7)
    assert G().value == 7


def test_required_setting_raises_and_default_is_used():
    class H:
        @config_setting
        def required(self) -> str: ...

        @config_setting(default='fallback')
        def optional(self) -> str: ...

    with pytest.raises(KeyError):
        _ = H().required

    assert H().optional == 'fallback'

    bind_config_values(optional='bound')
    assert H().optional == 'bound'


def test_subclasses_resolve_through_the_mro():
    class Base:
        @config_setting(default=1)
        def level(self) -> int: ...

    class Sub(Base):
        pass

    assert Sub().level == 1

    bind_config_values(**{'Base.level': 2})
    assert Base().level == 2
    assert Sub().level == 2

    bind_config_values(Sub={'level': 3})
    assert Sub().level == 3
    assert Base().level == 2

    assert resolve_setting(Sub, 'level') == 3
    assert resolve_setting(Sub, 'unknown', 'x') == 'x'
    with pytest.raises(KeyError):
        resolve_setting(Sub, 'unknown')


def test_class_access_returns_the_property():
    class K:
        @config_setting(default=5)
        def size(self) -> int:
            """Number of things."""
            ...

    prop = K.__dict__['size']
    assert K.size is prop
    assert prop.__doc__ == 'Number of things.'

    with pytest.raises(AttributeError):
        K().size = 3  # type: ignore
