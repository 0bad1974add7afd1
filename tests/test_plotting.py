import matplotlib.pyplot as plt

from WinExpectancy.fixtures import generate_demo_timeline
from WinExpectancy.plotting import plot_re_matrix, plot_wp_timeline
from WinExpectancy.timeline import aggregate_timeline


def test_plot_wp_timeline_saves(tmp_path, capsys):
    save_path = tmp_path / "timeline.png"
    fig = plot_wp_timeline(generate_demo_timeline(), save_path=str(save_path))
    try:
        assert save_path.exists()
        assert "Saved plot to" in capsys.readouterr().out
        assert fig.axes[0].get_ylim() == (0, 100)
    finally:
        plt.close(fig)


def test_plot_wp_timeline_custom_title():
    fig = plot_wp_timeline(generate_demo_timeline(), title="Game 1")
    try:
        assert any(ax.get_title() == "Game 1" for ax in fig.axes)
    finally:
        plt.close(fig)


def test_plot_empty_timeline_still_saves(tmp_path, capsys):
    save_path = tmp_path / "empty.png"
    fig = plot_wp_timeline(aggregate_timeline([]), save_path=str(save_path))
    plt.close(fig)
    assert save_path.exists()
    assert "Saved plot to" in capsys.readouterr().out


def test_plot_quiet_save(tmp_path, capsys):
    save_path = tmp_path / "quiet.png"
    fig = plot_wp_timeline(generate_demo_timeline(), save_path=str(save_path), verbose=False)
    plt.close(fig)
    assert save_path.exists()
    assert capsys.readouterr().out == ""


def test_plot_re_matrix(tmp_path):
    save_path = tmp_path / "re.png"
    fig = plot_re_matrix(save_path=str(save_path))
    plt.close(fig)
    assert save_path.exists()
