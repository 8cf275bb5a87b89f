"""Validators for the brazilian document numbers (CPF, CNPJ and PIS/PASEP).

Each validator sanitizes the input to digits first, so masked and bare
numbers are accepted alike.
"""

from typing import Any, Sequence

from .masks import is_repeated, mask_text, sanitize


def _check_digit(digits: str, weights: Sequence[int]) -> int:
    total = sum(int(digit) * weight for digit, weight in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


class Cpf:
    """Brazilian Natural Person Registry (CPF) number."""
    
    LENGTH = 11
    MASK = "###.###.###-##"
    
    @classmethod
    def filter(cls, value: Any) -> Any:
        """Mask as XXX.XXX.XXX-XX."""
        return mask_text(value, cls.MASK)
    
    @classmethod
    def validate(cls, value: Any) -> bool:
        """Validate both CPF check digits."""
        cpf = sanitize(value, cls.LENGTH)
        if cpf is None or is_repeated(cpf):
            return False
        
        first = _check_digit(cpf[:9], range(10, 1, -1))
        if int(cpf[9]) != first:
            return False
        
        second = _check_digit(cpf[:10], range(11, 1, -1))
        return int(cpf[10]) == second


class Cnpj:
    """Brazilian Legal Entity Registry (CNPJ) number."""
    
    LENGTH = 14
    MASK = "##.###.###/####-##"
    
    _FIRST_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
    _SECOND_WEIGHTS = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
    
    @classmethod
    def filter(cls, value: Any) -> Any:
        """Mask as XX.XXX.XXX/XXXX-XX."""
        return mask_text(value, cls.MASK)
    
    @classmethod
    def validate(cls, value: Any) -> bool:
        """Validate both CNPJ check digits."""
        cnpj = sanitize(value, cls.LENGTH)
        if cnpj is None or is_repeated(cnpj):
            return False
        
        first = _check_digit(cnpj[:12], cls._FIRST_WEIGHTS)
        if int(cnpj[12]) != first:
            return False
        
        second = _check_digit(cnpj[:13], cls._SECOND_WEIGHTS)
        return int(cnpj[13]) == second


class Pis:
    """Brazilian PIS/PASEP number.
    
    - PIS: Social Integration Program (Programa de Integração Social)
    - PASEP: Program for Formation of the Public Server's Estate
      (Programa de Formação do Patrimônio do Servidor Público)
    """
    
    LENGTH = 11
    MASK = "###.#####.##-#"
    
    _WEIGHTS = (3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
    
    @classmethod
    def filter(cls, value: Any) -> Any:
        """Mask as XXX.XXXXX.XX-X."""
        return mask_text(value, cls.MASK)
    
    @classmethod
    def validate(cls, value: Any) -> bool:
        """Validate the PIS check digit."""
        pis = sanitize(value, cls.LENGTH)
        if pis is None or is_repeated(pis):
            return False
        
        return int(pis[10]) == _check_digit(pis[:10], cls._WEIGHTS)
