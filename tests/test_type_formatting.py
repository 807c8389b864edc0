from pokebattle.core.types import is_known_type, normalize_type, rich_type_badge


def test_normalize_and_known_types():
    assert normalize_type('  Fairy ') == 'fairy'
    assert is_known_type('GROUND')
    assert not is_known_type('shadow')


def test_rich_badges():
    assert rich_type_badge('Fire') == '[bold #EE8130]FIRE[/bold #EE8130]'
    assert rich_type_badge('shadow') == 'SHADOW'
