# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from typing import Optional
from typing import Sequence

from runbook import Operator


class ScriptedOperator(Operator):
    """Answer prompts with labels given in advance, in order."""

    def __init__(self, answers: Sequence[str], edited_text: Optional[str] = None):
        self._answers = list(answers)
        self._edited_text = edited_text
        self.prompts = []

    def choose(self, prompt, options):
        self.prompts.append(prompt)
        if not self._answers:
            raise RuntimeError(f"No answer left for {prompt!r} {list(options)}")
        answer = self._answers.pop(0)
        if answer not in options:
            raise RuntimeError(f"Answer {answer!r} is not one of {list(options)} for {prompt!r}")
        return list(options).index(answer)

    def edit(self, text):
        return self._edited_text

    def answers_left(self):
        return len(self._answers)


class AlwaysAnswer(Operator):

    def __init__(self, answer: str):
        self._answer = answer
        self.prompts = []

    def choose(self, prompt, options):
        self.prompts.append(prompt)
        return list(options).index(self._answer)

    def edit(self, text):
        return None
