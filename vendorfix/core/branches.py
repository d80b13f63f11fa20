"""分支回退序列

固定三档回退分支，从最具体到最通用: develop -> stage -> master。
"""

from __future__ import annotations

BRANCH_DEVELOP = "develop"
BRANCH_STAGE = "stage"
BRANCH_MASTER = "master"


def build_fallback_sequence(requested: str) -> list[str]:
    """根据请求的分支计算依次尝试的分支列表

    规则:
      - master  -> [master]
      - stage   -> [stage, master]（不经过 develop）
      - develop -> [develop, stage, master]
      - 其他    -> [requested, develop, stage, master]

    示例:
        >>> build_fallback_sequence("feature-x")
        ['feature-x', 'develop', 'stage', 'master']
    """
    branches = [BRANCH_MASTER]
    if requested == BRANCH_MASTER:
        return branches
    branches.insert(0, BRANCH_STAGE)
    if requested == BRANCH_STAGE:
        return branches
    branches.insert(0, BRANCH_DEVELOP)
    if requested == BRANCH_DEVELOP:
        return branches
    return [requested, *branches]
