import os
import sys
import tempfile
from pathlib import Path

import pytest

# Keep grader.log out of the working tree while testing
os.environ.setdefault("GRADER_LOG_DIR", tempfile.mkdtemp(prefix="grader-logs-"))

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


FULL_CARD = """\
// Displays one student's details
function StudentCard(props) {
  return (
    <div className="student-card">
      <h2>Name: {props.name}</h2>
      <p>ID: {props.id}</p>
      <p>Department: {props.department}</p>
    </div>
  );
}

export default StudentCard;
"""

FULL_APP = """\
import StudentCard from './components/StudentCard';

function App() {
  return (
    <div>
      <StudentCard name="Ada Lovelace" id="S001" department="Mathematics" />
      <StudentCard name="Alan Turing" id="S002" department="Computer Science" />
    </div>
  );
}

export default App;
"""

NAME_ONLY_CARD = """\
const StudentCard = () => {
  return (
    <div>
      <h2>Name: Ada Lovelace</h2>
    </div>
  );
};

export default StudentCard;
"""

SINGLE_RENDER_APP = """\
import StudentCard from "./components/StudentCard.jsx";

export default function App() {
  return <StudentCard />;
}
"""


@pytest.fixture()
def lab_repo(tmp_path):
    """Returns a helper that writes App and StudentCard files into a fake repo."""

    def write(app=None, card=None, app_name="App.jsx", card_name="StudentCard.jsx"):
        if app is not None:
            app_path = tmp_path / "src" / app_name
            app_path.parent.mkdir(parents=True, exist_ok=True)
            app_path.write_text(app, encoding="utf-8")
        if card is not None:
            card_path = tmp_path / "src" / "components" / card_name
            card_path.parent.mkdir(parents=True, exist_ok=True)
            card_path.write_text(card, encoding="utf-8")
        return tmp_path

    return write


@pytest.fixture()
def make_submission():
    """Builds a Submission straight from source text, without touching disk."""
    from core.sources import LocatedFile, Submission

    def build(app=None, card=None):
        return Submission(
            app=LocatedFile("src/App.jsx", app) if app is not None else LocatedFile(None, ""),
            card=LocatedFile("src/components/StudentCard.jsx", card) if card is not None else LocatedFile(None, ""),
        )

    return build
