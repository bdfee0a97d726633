import pytest

from firewater.sprites import BackgroundImage, Button, Door, Sprite, resource_path


def test_resource_path_joins_directory():
    path = resource_path("material/background/cover.png", "assets")
    assert path.replace("\\", "/") == "assets/material/background/cover.png"


def test_sprite_set_image_keeps_size():
    sprite = Sprite("a.png", 3, size=(20, 30))
    sprite.set_image("b.png")
    assert sprite.image_path == "b.png"
    assert sprite.size == (20.0, 30.0)
    assert sprite.z_index == 3
    assert sprite.visible is True


def test_background_image():
    bg = BackgroundImage("cover.png", size=(975, 725))
    assert bg.z_index == -10
    assert (bg.width, bg.height) == (975, 725)
    bg.position = (100, -50)
    assert (bg.x, bg.y) == (100, -50)


@pytest.fixture
def button():
    return Button("current-level.png", position=(0, -220), size=(100, 40))


def test_button_defaults(button):
    assert button.interactable is True
    assert button.visible is True
    assert (button.width, button.height) == (100, 40)
    assert button.position == (0.0, -220.0)


def test_button_hit_test(button):
    assert button.is_clicked(0, -220) is True
    assert button.is_clicked(50, -240) is True
    assert button.is_clicked(-50, -200) is True
    assert button.is_clicked(51, -220) is False
    assert button.is_clicked(0, 0) is False


def test_button_not_interactable(button):
    button.interactable = False
    assert button.is_clicked(0, -220) is False


def test_button_hidden(button):
    button.visible = False
    assert button.is_clicked(0, -220) is False


def test_handle_click_runs_callback(button):
    calls = []
    button.on_click = lambda: calls.append("clicked")
    assert button.handle_click(0, -220) is True
    assert calls == ["clicked"]
    assert button.handle_click(500, 500) is False
    assert calls == ["clicked"]


def test_handle_click_without_callback(button):
    assert button.handle_click(0, -220) is True


def test_door_pivot_and_layer():
    door = Door("door-fireboy.png", size=(30, 30))
    assert door.z_index == 10
    assert door.pivot == (0.0, 0.0)
    assert door.is_open is False


def test_door_open_hides_it():
    door = Door("door-watergirl.png", size=(60, 80))
    door.set_open(True)
    assert door.is_open is True
    assert door.visible is False
    door.set_open(False)
    assert door.is_open is False
    assert door.visible is True