import pytest

from tileforge.editor import Editor, Key
from tileforge.graph import Node, Parameter, TileTexture
from tileforge.layout import Layout


def make_editor():
    layout = Layout(screen_w=600, screen_h=400, coll_h=17, palette_height=80)
    return Editor(layout)


def test_shift_tracking():
    ed = make_editor()
    ed.key_down(Key.LSHIFT)
    assert ed.shift_down is True
    ed.key_up(Key.LSHIFT)
    assert ed.shift_down is False


def test_undo_redo_add_color():
    ed = make_editor()
    ed.add_color()
    assert len(ed.project.palette) == 2
    ed.key_down(Key.Z, ctrl=True)
    assert len(ed.project.palette) == 1
    ed.key_down(Key.Y, ctrl=True)
    assert len(ed.project.palette) == 2


def test_undo_needs_ctrl():
    ed = make_editor()
    ed.add_color()
    ed.key_down(Key.Z)
    assert len(ed.project.palette) == 2


def test_new_file_resets_palette():
    ed = make_editor()
    ed.project.palette = [(255, 0, 0), (0, 255, 0)]
    ed.select_color(1)
    ed.key_down(Key.N, ctrl=True)
    assert ed.project.palette == [(0, 0, 0)]
    assert ed.rgb == (0, 0, 0)


def test_texture_navigation_clamps():
    ed = make_editor()
    ed.project.textures.append(TileTexture())
    ed.key_down(Key.LEFT)
    assert ed.project.current_texture == 0
    ed.key_down(Key.RIGHT)
    ed.key_down(Key.RIGHT)
    assert ed.project.current_texture == len(ed.project.textures) - 1


def test_dialog_requests_and_escape():
    ed = make_editor()
    ed.key_down(Key.S, ctrl=True)
    assert ed.dialog == "save"
    ed.key_down(Key.O, ctrl=True)
    assert ed.dialog == "save"
    ed.key_down(Key.ESCAPE)
    assert ed.dialog is None


def _start_typing(ed, param):
    ed.pending_param = param
    ed.type_timer = 0
    for _ in range(20):
        ed.tick()


def test_typing_limit_and_commit_clamps():
    ed = make_editor()
    param = Parameter(kind=1, value=5, value2=0, value3=255)
    _start_typing(ed, param)
    assert ed.typing_param is param
    ed.text_input("99999")
    ed.text_input("99999")
    ed.text_input("1")
    assert len(ed.typing) == 10
    ed.key_down(Key.RETURN)
    assert param.value == 255
    assert ed.typing_param is None


def test_backspace_removes_last_char():
    ed = make_editor()
    param = Parameter(kind=2, value2=-1, value3=-1)
    _start_typing(ed, param)
    ed.text_input("42")
    ed.key_down(Key.BACKSPACE)
    assert ed.typing == "4"
    ed.key_down(Key.RETURN)
    assert param.value == 4


def test_wheel_zoom_limits():
    ed = make_editor()
    x, y = 300, 10
    for _ in range(5):
        ed.wheel(-1, x, y)
    assert ed.project.zoom == 2
    for _ in range(5):
        ed.wheel(1, x, y)
    assert ed.project.zoom == 1


def test_wheel_outside_canvas_ignored():
    ed = make_editor()
    ed.wheel(-1, 1, 10)
    assert ed.project.zoom == 1


def test_tick_timers_wrap():
    ed = make_editor()
    ed.blink_timer = 64
    ed.rot_timer = 345
    ed.error_timer = 3
    ed.tick()
    assert ed.blink_timer == 0
    assert ed.rot_timer == 0
    assert ed.error_timer == 2


def test_tick_moves_nodes_with_damping():
    ed = make_editor()
    node = Node(name="n", x=10.0, sx=3.0)
    ed.project.current.nodes.append(node)
    ed.tick()
    assert node.x == pytest.approx(13.0)
    assert node.sx == pytest.approx(2.0)


def test_loaded_node_finishes():
    ed = make_editor()
    node = Node(name="n", loading=True, loaded=True)
    ed.project.current.nodes.append(node)
    ed.tick()
    assert node.done is True
    assert node.loading is False


def test_deleted_node_removed_when_loaded():
    ed = make_editor()
    node = Node(name="n", loading=True, loaded=True, abort=True, deleted=True)
    ed.project.current.nodes.append(node)
    ed.tick()
    assert node not in ed.project.current.nodes


def test_links_follow_connections():
    ed = make_editor()
    a = Node(name="a", x=0, y=0, w=40, h=40)
    b = Node(name="b", x=100, y=0, w=40, h=40)
    out = a.add_output()
    inp = b.add_input()
    inp.source = out
    ed.project.current.nodes.extend([a, b])
    ed.tick()
    curve = ed.links[inp]
    assert curve[0][1] == curve[1][1]
    assert curve[3][0] > curve[0][0]


def test_select_color_sets_hsv():
    ed = make_editor()
    ed.project.palette = [(0, 0, 0), (255, 0, 0)]
    ed.select_color(1)
    assert ed.rgb == (255, 0, 0)
    assert ed.hsv == (0, 100, 100)


def test_select_color_out_of_range():
    ed = make_editor()
    with pytest.raises(IndexError):
        ed.select_color(3)


def test_duplicate_and_delete_color():
    ed = make_editor()
    ed.project.palette = [(10, 20, 30)]
    ed.duplicate_color()
    assert ed.project.palette == [(10, 20, 30), (10, 20, 30)]
    assert ed.project.selected_color == 1
    ed.delete_color()
    assert ed.project.palette == [(10, 20, 30)]
    assert ed.project.selected_color == 0
    ed.delete_color()
    assert ed.project.palette == [(0, 0, 0)]