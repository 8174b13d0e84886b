from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, HTMLResponse, Response

router = APIRouter()


STUDENTS_TABLE_HTML = """<!doctype html>
<html><head><meta charset="utf-8"/><title>Students</title>
<style>
body{font-family:system-ui,Arial;margin:20px}
.container{max-width:1100px;margin:40px auto}
table{width:100%;border-collapse:collapse}
th,td{padding:8px;border-bottom:1px solid #ddd;text-align:left}
tbody tr:nth-child(odd){background:#f6f6f6}
input[type=number]{width:80px;padding:4px}
.btn{color:#fff;border:0;padding:6px 12px;border-radius:6px;cursor:pointer}
.btn-primary{background:#2563eb}
.btn-success{background:#16a34a}
</style></head>
<body>
<div class="container">
  <h3>Students List</h3>
  <table>
    <thead><tr>
      <th>Name</th><th>Roll Number</th>
      <th>Java</th><th>CPP</th><th>Python</th><th>GenAI</th><th>FSD</th>
      <th>Action</th>
    </tr></thead>
    <tbody id="rows"></tbody>
  </table>
</div>
<script>
  const SUBJECTS = ["Java", "CPP", "Python", "GenAI", "FSD"];
  let students = [];
  let editRow = null;        // rollNo of the row being edited
  let updatedScores = {};    // edit buffer for that row

  function cell(content){
    const td = document.createElement('td');
    if (content instanceof Node) td.appendChild(content); else td.textContent = content;
    return td;
  }

  function render(){
    const tbody = document.getElementById('rows');
    tbody.innerHTML = '';
    for (const s of students){
      const tr = document.createElement('tr');
      const editing = editRow === s.rollNo;
      tr.appendChild(cell(s.name));
      tr.appendChild(cell(s.rollNo));
      for (const subject of SUBJECTS){
        if (editing){
          const input = document.createElement('input');
          input.type = 'number';
          input.name = subject;
          const v = updatedScores[subject];
          input.value = Number.isNaN(v) || v === undefined ? '' : v;
          input.oninput = e => { updatedScores[subject] = parseInt(e.target.value, 10); };
          tr.appendChild(cell(input));
        } else {
          tr.appendChild(cell(String(s.scores[subject])));
        }
      }
      const btn = document.createElement('button');
      if (editing){
        btn.className = 'btn btn-success';
        btn.textContent = 'Submit';
        btn.onclick = () => submitRow(s.rollNo);
      } else {
        btn.id = 'update' + s.rollNo;
        btn.className = 'btn btn-primary';
        btn.textContent = 'Update';
        btn.onclick = () => { editRow = s.rollNo; updatedScores = {...s.scores}; render(); };
      }
      tr.appendChild(cell(btn));
      tbody.appendChild(tr);
    }
  }

  async function fetchStudents(){
    try {
      const resp = await fetch('/allStudents');
      if (!resp.ok) throw new Error('HTTP ' + resp.status);
      students = await resp.json();
      render();
    } catch (err) {
      console.error('Error fetching students:', err);
    }
  }

  async function submitRow(rollNo){
    try {
      const resp = await fetch('/student/' + encodeURIComponent(rollNo), {
        method: 'PUT',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify({scores: updatedScores}),
      });
      const out = await resp.json();
      if (!resp.ok) throw new Error(out.message || ('HTTP ' + resp.status));
      alert(out.message);
      editRow = null;
      fetchStudents();
    } catch (err) {
      console.error('Error updating student:', err);
      alert('Failed to update student.');
    }
  }

  fetchStudents();
</script>
</body></html>"""


def _build_file(build_dir: Path, rel_path: str) -> Path | None:
    """A file under the client build dir, or None. Never escapes build_dir."""
    if not build_dir.is_dir():
        return None
    root = build_dir.resolve()
    candidate = (root / rel_path).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
def client_entry(full_path: str, request: Request) -> Response:
    """
    Catch-all for the browser client: a built asset if one matches the path,
    else the build's index.html, else the bundled students table page.
    """
    build_dir = Path(request.app.state.settings.CLIENT_BUILD_DIR)

    asset = _build_file(build_dir, full_path) if full_path else None
    if asset is not None:
        return FileResponse(asset)

    index = _build_file(build_dir, "index.html")
    if index is not None:
        return FileResponse(index)

    return HTMLResponse(STUDENTS_TABLE_HTML)
