"""
Demo walkthrough test: zkp.kzg.example.main() runs every step and succeeds.
"""

from zkp.kzg import example


class TestDemo:
    def test_main_succeeds(self, capsys):
        assert example.main() is True
        out = capsys.readouterr().out
        assert "[6]" in out
        assert "모든 테스트 통과" in out
