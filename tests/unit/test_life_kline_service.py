#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
人生K线服务层单元测试
"""

import json
from datetime import date
from unittest.mock import MagicMock

import pytest

from core.analyzers.kline_interpolator import NoJitter
from core.exceptions import ChartValidationError, InvalidInputError, ResultParseError
from server.services.life_kline_service import LifeKlineService
from tests.kline_fixtures import make_result


class TestBuildPrompt:
    def test_valid_input(self, sample_prompt_input):
        prompt = LifeKlineService.build_prompt(sample_prompt_input)
        assert '- 四柱: 庚午年 辛巳月 庚辰日 壬午时' in prompt

    def test_invalid_pillar(self, sample_prompt_input):
        sample_prompt_input['dayPillar'] = '庚'
        with pytest.raises(InvalidInputError) as exc_info:
            LifeKlineService.build_prompt(sample_prompt_input)
        assert exc_info.value.message == '日柱格式错误（应为2个汉字）'

    def test_invalid_start_age(self, sample_prompt_input):
        sample_prompt_input['startAge'] = 12
        with pytest.raises(InvalidInputError) as exc_info:
            LifeKlineService.build_prompt(sample_prompt_input)
        assert exc_info.value.message == '起运年龄必须在 0-10 之间'


class TestImport:
    def test_import_canonical_json(self, valid_result):
        """测试：导出的 JSON 可以原样导入"""
        text = json.dumps(valid_result, ensure_ascii=False)
        assert LifeKlineService.import_result(text) == valid_result

    def test_import_fenced_flat_output(self, flat_llm_output):
        text = '```json\n' + json.dumps(flat_llm_output, ensure_ascii=False) + '\n```'
        result = LifeKlineService.import_result(text)
        assert result['analysis']['summaryScore'] == 9
        assert len(result['chartData']) == 30

    def test_import_invalid_json(self):
        with pytest.raises(ResultParseError):
            LifeKlineService.import_result('{"chartData": [')

    def test_import_invalid_data(self, valid_result):
        valid_result['chartData'][3].update({'open': 50, 'close': 60, 'high': 55})
        with pytest.raises(ChartValidationError) as exc_info:
            LifeKlineService.import_result(json.dumps(valid_result))
        assert exc_info.value.message == 'chartData[3].high (55) 必须 >= max(open, close) (60)'


class TestGenerate:
    def test_generate_with_client(self, sample_prompt_input, flat_llm_output):
        client = MagicMock()
        client.generate.return_value = {
            'text': '```json\n' + json.dumps(flat_llm_output, ensure_ascii=False) + '\n```',
            'usage': {'inputTokens': 10, 'outputTokens': 20},
        }

        generation = LifeKlineService.generate(sample_prompt_input, client=client)

        assert generation['usage'] == {'inputTokens': 10, 'outputTokens': 20}
        assert len(generation['data']['chartData']) == 30
        prompt = client.generate.call_args.args[0]
        assert prompt.startswith('\n你是一位八字命理大师')

    @pytest.mark.parametrize("points", [30, 100])
    def test_prompt_count_matches_validator(self, monkeypatch, sample_prompt_input, points):
        """测试：模型按提示词给出的条数返回时，结果能通过校验"""
        monkeypatch.setenv('LIFE_KLINE_CHART_POINTS', str(points))
        client = MagicMock()
        client.generate.return_value = {
            'text': json.dumps(make_result(points), ensure_ascii=False),
            'usage': {'inputTokens': 1, 'outputTokens': 1},
        }

        generation = LifeKlineService.generate(sample_prompt_input, client=client)

        assert f'(共{points}条，' in client.generate.call_args.args[0]
        assert len(generation['data']['chartData']) == points

    def test_invalid_input_skips_llm(self, sample_prompt_input):
        client = MagicMock()
        sample_prompt_input['yearPillar'] = 'xx'
        with pytest.raises(InvalidInputError):
            LifeKlineService.generate(sample_prompt_input, client=client)
        client.generate.assert_not_called()


class TestInterpolate:
    def test_day_view(self, valid_result, fake_calendar):
        data = LifeKlineService.interpolate(
            valid_result, date(1990, 5, 15), 'day', date(2000, 3, 1), fake_calendar, NoJitter(),
        )
        assert data['view'] == 'day'
        assert data['start'] == '2000-02-23'
        assert data['end'] == '2000-03-08'
        assert len(data['points']) == 15
        assert all(p['age'] == 11 for p in data['points'])

    def test_week_view(self, valid_result, fake_calendar):
        data = LifeKlineService.interpolate(
            valid_result, date(1990, 5, 15), 'week', date(2000, 3, 15), fake_calendar, NoJitter(),
        )
        assert data['view'] == 'week'
        assert 8 <= len(data['points']) <= 10
        assert sum(p['days'] for p in data['points']) == 61

    def test_invalid_view(self, valid_result):
        with pytest.raises(InvalidInputError):
            LifeKlineService.interpolate(valid_result, date(1990, 5, 15), 'month')

    def test_invalid_result(self, valid_result):
        del valid_result['analysis']
        with pytest.raises(ChartValidationError):
            LifeKlineService.interpolate(valid_result, date(1990, 5, 15), 'day')


class TestInsights:
    @staticmethod
    def _levels():
        return [
            {'age': 10, 'type': 'support', 'value': 4.0, 'strength': 'strong', 'reason': '正印护身'},
            {'age': 12, 'type': 'support', 'value': 3.0, 'strength': 'weak', 'reason': '比肩帮扶'},
            {'age': 20, 'type': 'pressure', 'value': 7.0, 'strength': 'medium', 'reason': '七杀攻身'},
        ]

    def test_insights_from_yearly_data(self, valid_result):
        valid_result['chartData'][4]['energyScore'] = {
            'total': 2.5, 'monthCoefficient': 3, 'dayRelation': 2, 'hourFluctuation': 2, 'isBelowSupport': True,
        }
        valid_result['chartData'][6]['actionAdvice'] = {
            'suggestions': ['稳健理财', '提升技能', '维护人脉'], 'warnings': ['忌冲动', '忌借贷'], 'scenario': '事业',
        }
        valid_result['analysis']['supportPressureLevels'] = self._levels()

        insights = LifeKlineService.insights(valid_result)

        assert insights['riskWarning']['age'] == 5
        assert [group['scenario'] for group in insights['actionAdvice']] == ['事业']
        assert insights['actionAdvice'][0]['points'][0]['age'] == 7
        assert insights['levels']['support']['value'] == 4.0
        assert insights['levels']['pressure']['value'] == 7.0

    def test_insights_without_annotations(self, valid_result):
        insights = LifeKlineService.insights(valid_result)
        assert insights == {'riskWarning': None, 'actionAdvice': [], 'levels': {'support': None, 'pressure': None}}

    def test_insights_invalid_result(self, valid_result):
        valid_result['chartData'].pop()
        with pytest.raises(ChartValidationError):
            LifeKlineService.insights(valid_result)

    def test_interpolate_includes_visible_levels(self, valid_result, fake_calendar):
        valid_result['analysis']['supportPressureLevels'] = self._levels()
        data = LifeKlineService.interpolate(
            valid_result, date(1990, 5, 15), 'day', date(2000, 3, 1), fake_calendar, NoJitter(),
        )
        assert data['levels']['support']['value'] == 4.0
        assert data['levels']['pressure']['value'] == 7.0
