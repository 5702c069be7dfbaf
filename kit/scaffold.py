"""
Kit 安裝器 (Scaffold)

把 E2E testing kit 的樣板檔案複製到既有專案：

    target/
    ├── pytest.ini            # 若不存在才建立
    ├── requirements.txt      # 若存在，補上 kit 本身與缺少的套件
    ├── .gitignore            # 補上測試產物
    ├── specs/                # 測試規格文件放這裡
    └── e2e/
        ├── conftest.py       # driver / 截圖 fixtures
        └── test_example.py   # 範例測試

已存在的檔案一律不覆寫。

用法：
    python -m kit ~/my_project

    from kit.scaffold import Scaffolder
    Scaffolder("~/my_project").run()
"""

import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from textwrap import dedent

from core.exceptions import ScaffoldError
from utils.logger import logger

# kit 根目錄
KIT_ROOT = Path(__file__).resolve().parent.parent

DIRS_TO_CREATE = ["e2e", "specs"]

FILES_TO_COPY = [
    ("e2e/conftest.py", "e2e/conftest.py"),
    ("e2e/test_example.py", "e2e/test_example.py"),
]

PYTEST_INI = dedent("""\
    [pytest]
    testpaths = e2e
    python_files = test_*.py
    python_classes = Test*
    python_functions = test_*
    addopts = -v --tb=short --alluredir=allure-results
    markers =
        e2e: 瀏覽器端對端測試
""")

REQUIREMENTS = [
    "pytest>=8.0.0",
    "selenium>=4.20.0",
    "allure-pytest>=2.13.0",
    "requests>=2.31.0",
    "Pillow>=10.0.0",
    "reportlab>=4.0.0",
]

# kit 本身的套件名；複製過去的 e2e/conftest.py 依賴它提供的 config / core / utils
KIT_DIST_NAME = "e2e-testing-kit"

# 與 kit 同名的頂層套件；目標專案若也有，會遮蔽 kit 的模組
KIT_PACKAGES = ("config", "core", "utils", "report", "kit")

GITIGNORE_ENTRIES = [
    "",
    "# E2E Testing",
    "allure-results/",
    "allure-report/",
    "screenshots/",
    "reports/",
    "test-report.pdf",
]

NEXT_STEPS = dedent("""\
    下一步：

       1. 安裝 kit 與依賴（conftest 需要 kit 的 config / core / utils）：
          pip install -r requirements.txt
          # 沒有 requirements.txt 時：
          pip install {kit_root}

       2. 在 e2e/ 目錄撰寫測試（設定 BASE_URL 指向受測站台）

       3. 執行測試：
          pytest e2e --alluredir=allure-results

       4. 產生報告：
          allure serve allure-results     # HTML 報告
          python -m report                # PDF 報告
""")

_NAME_RE = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")


@dataclass
class ScaffoldResult:
    """安裝結果"""

    target: Path
    created_dirs: list[str] = field(default_factory=list)
    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    added_requirements: list[str] = field(default_factory=list)
    gitignore: str = ""
    shadowing: list[str] = field(default_factory=list)


def kit_requirement(kit_root: Path) -> str:
    """指向 kit 所在目錄的 requirements 行 (PEP 508 direct reference)"""
    return f"{KIT_DIST_NAME} @ {Path(kit_root).resolve().as_uri()}"


def requirement_name(line: str) -> str | None:
    """取出 requirements 行的套件名（正規化）；註解、空行、選項回傳 None"""
    stripped = line.strip()
    if not stripped or stripped.startswith(("#", "-")):
        return None
    m = _NAME_RE.match(stripped)
    if not m:
        return None
    return re.sub(r"[-_.]+", "-", m.group(1)).lower()


class Scaffolder:
    """把 kit 樣板安裝到目標專案"""

    def __init__(self, target: str | Path, kit_root: str | Path | None = None):
        self.target = Path(target).expanduser().resolve()
        self.kit_root = Path(kit_root or KIT_ROOT).resolve()

    def run(self) -> ScaffoldResult:
        """
        執行安裝。

        Raises:
            ScaffoldError: 目標路徑存在但不是目錄
        """
        if self.target.exists() and not self.target.is_dir():
            raise ScaffoldError(str(self.target), "不是目錄")
        self.target.mkdir(parents=True, exist_ok=True)

        result = ScaffoldResult(target=self.target)
        print("\n🧪 E2E Testing Kit Setup\n")
        print(f"Target directory: {self.target}\n")

        self._create_dirs(result)
        self._copy_files(result)
        self._write_pytest_ini(result)
        self._update_requirements(result)
        self._update_gitignore(result)
        self._check_shadowing(result)

        print("\n✅ Setup complete!\n")
        print(NEXT_STEPS.format(kit_root=self.kit_root))
        logger.info(
            f"[Scaffold] 完成: {self.target} "
            f"(複製 {len(result.copied)}，略過 {len(result.skipped)})"
        )
        return result

    # ── 各步驟 ──

    def _create_dirs(self, result: ScaffoldResult) -> None:
        print("📁 Creating directories...")
        for name in DIRS_TO_CREATE:
            path = self.target / name
            if not path.exists():
                path.mkdir(parents=True)
                result.created_dirs.append(name)
                print(f"   Created: {name}/")

    def _copy_files(self, result: ScaffoldResult) -> None:
        print("\n📄 Copying files...")
        for src_rel, dest_rel in FILES_TO_COPY:
            src = self.kit_root / src_rel
            dest = self.target / dest_rel
            if not src.exists():
                logger.debug(f"[Scaffold] 樣板不存在，略過: {src}")
                continue
            if dest.exists():
                result.skipped.append(dest_rel)
                print(f"   Skipped (exists): {dest_rel}")
                continue
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dest)
            result.copied.append(dest_rel)
            print(f"   Copied: {dest_rel}")

    def _write_pytest_ini(self, result: ScaffoldResult) -> None:
        dest = self.target / "pytest.ini"
        if dest.exists():
            result.skipped.append("pytest.ini")
            print("   Skipped (exists): pytest.ini")
            return
        dest.write_text(PYTEST_INI, encoding="utf-8")
        result.copied.append("pytest.ini")
        print("   Copied: pytest.ini")

    def _update_requirements(self, result: ScaffoldResult) -> None:
        print("\n📦 Updating requirements.txt...")
        req_path = self.target / "requirements.txt"
        if not req_path.exists():
            print("   No requirements.txt found, skipping dependency injection")
            return

        content = req_path.read_text(encoding="utf-8")
        existing = {
            name for name in map(requirement_name, content.splitlines()) if name
        }
        wanted = [kit_requirement(self.kit_root)] + REQUIREMENTS
        missing = [r for r in wanted if requirement_name(r) not in existing]
        if missing:
            if content and not content.endswith("\n"):
                content += "\n"
            content += "\n".join(missing) + "\n"
            req_path.write_text(content, encoding="utf-8")
        result.added_requirements = missing
        print(f"   Added {len(missing)} requirements")

    def _update_gitignore(self, result: ScaffoldResult) -> None:
        print("\n📝 Updating .gitignore...")
        path = self.target / ".gitignore"
        block = "\n".join(GITIGNORE_ENTRIES) + "\n"

        if not path.exists():
            path.write_text(block.lstrip("\n"), encoding="utf-8")
            result.gitignore = "created"
            print("   Created .gitignore with testing entries")
            return

        content = path.read_text(encoding="utf-8")
        if "allure-results" in content:
            result.gitignore = "unchanged"
            print("   .gitignore already configured")
            return

        if content and not content.endswith("\n"):
            content += "\n"
        path.write_text(content + block, encoding="utf-8")
        result.gitignore = "updated"
        print("   Added testing entries to .gitignore")

    def _check_shadowing(self, result: ScaffoldResult) -> None:
        """目標專案若有同名頂層套件，pytest 可能匯入到專案自己的模組"""
        if self.target == self.kit_root:
            return
        for name in KIT_PACKAGES:
            if (self.target / name).is_dir() or (self.target / f"{name}.py").is_file():
                result.shadowing.append(name)
        if result.shadowing:
            names = ", ".join(result.shadowing)
            print(f"\n⚠️  Project packages may shadow the kit: {names}")
            logger.warning(f"[Scaffold] 目標專案有與 kit 同名的套件: {names}")
