# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from typing import Callable
from typing import Mapping
from typing import Optional

required_tools = ['terraform', 'kubectl', 'helm', 'argocd', 'aws']


def find_tools(which: Callable[[str], Optional[str]]) -> Mapping[str, Optional[str]]:
    return {tool: which(tool) for tool in required_tools}


def check_tools(which: Callable[[str], Optional[str]]) -> bool:
    found = find_tools(which)
    width = max(len(tool) for tool in found)
    for tool, path in found.items():
        print(f"{tool:<{width}}  {path if path is not None else 'NOT FOUND'}")
    return all(path is not None for path in found.values())
