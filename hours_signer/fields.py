from dataclasses import dataclass


@dataclass
class TextField:
    placeholder: str = ""
    char_limit: int = 100
    value: str = ""
    cursor: int = 0
    focused: bool = False

    def set_value(self, value: str):
        self.value = value[: self.char_limit]
        self.cursor = len(self.value)

    def focus(self):
        self.focused = True

    def blur(self):
        self.focused = False

    def handle_key(self, key: str):
        if not self.focused:
            return
        if key == "backspace":
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor:]
                self.cursor -= 1
        elif key == "delete":
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1:]
        elif key == "left":
            self.cursor = max(0, self.cursor - 1)
        elif key == "right":
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key in ("home", "ctrl+a"):
            self.cursor = 0
        elif key in ("end", "ctrl+e"):
            self.cursor = len(self.value)
        elif key == "ctrl+u":
            self.value = ""
            self.cursor = 0
        elif len(key) == 1 and key.isprintable():
            if len(self.value) >= self.char_limit:
                return
            self.value = self.value[: self.cursor] + key + self.value[self.cursor:]
            self.cursor += 1

    def view(self) -> str:
        if not self.value and not self.focused:
            return f"> {self.placeholder}"
        if not self.value:
            return f"> |{self.placeholder}"
        if not self.focused:
            return f"> {self.value}"
        return f"> {self.value[: self.cursor]}|{self.value[self.cursor:]}"
