from client.views.notifications import ERROR, INFO, SUCCESS, TOAST_TTL, Notifier


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_should_replace_previous_toast():
    notifier = Notifier(clock=FakeClock())

    notifier.show("first", SUCCESS)
    notifier.show("second", ERROR)

    assert notifier.current.message == "second"
    assert notifier.current.icon == "exclamation-circle"


def test_should_expire_toast_after_ttl():
    clock = FakeClock()
    notifier = Notifier(clock=clock)
    notifier.show("saved", SUCCESS)

    clock.now = 100.0 + TOAST_TTL - 1
    assert notifier.current is not None

    clock.now = 100.0 + TOAST_TTL
    assert notifier.current is None


def test_should_dismiss_on_request():
    notifier = Notifier(clock=FakeClock())
    notifier.show("hello")

    notifier.dismiss()

    assert notifier.current is None


def test_should_treat_unknown_kind_as_info():
    toast = Notifier(clock=FakeClock()).show("hm", "celebration")
    assert toast.kind == INFO
    assert toast.icon == "info-circle"
