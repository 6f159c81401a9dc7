"""Tests for the command-line entry point"""
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from main import main


def write_items(tmp_path):
    path = tmp_path / "items.csv"
    path.write_text("Description,Quantity,Unit Price\nPipe,2,10\nValve,1,5\n", encoding='utf-8')
    return path


class TestMain:

    def test_generates_statement(self, tmp_path, capsys):
        items = write_items(tmp_path)
        payments = tmp_path / "payments.csv"
        payments.write_text("Amount,Method\n30,Cash\n30,Card\n", encoding='utf-8')
        output = tmp_path / "invoice.xlsx"
        html = tmp_path / "invoice.html"

        code = main([
            str(items), '--hours', '2', '--rate', '25', '--tax', '10',
            '--payments', str(payments), '--output', str(output), '--html', str(html),
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert output.exists()
        assert html.exists()
        assert "Total: BD 82.500" in out
        assert "Balance Due: BD 22.500" in out

    def test_discount_clamp_notice(self, tmp_path, capsys):
        items = write_items(tmp_path)

        code = main([
            str(items), '--hours', '2', '--rate', '25', '--tax', '10',
            '--discount', '1000', '--output', str(tmp_path / "invoice.xlsx"),
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "Total: BD 0.000" in out
        assert "clamped to zero" in out

    def test_benefit_pay_without_reference_fails(self, tmp_path, capsys):
        items = write_items(tmp_path)
        payments = tmp_path / "payments.csv"
        payments.write_text("Amount,Method\n30,BenefitPay\n", encoding='utf-8')

        code = main([str(items), '--payments', str(payments), '--output', str(tmp_path / "x.xlsx")])

        assert code == 1
        assert "reference number" in capsys.readouterr().err
